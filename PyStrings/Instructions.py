import logging
import os

import regex

linesep = '\n'

default_instructions = linesep.join([
    "You are an API that translates JSON to [target_language].",
    "All responses must be in JSON.",
    "",
    "Each item of the source JSON is a string resource of an application with a 'name', a 'value' and an 'isTranslatable' flag.",
    "Translate each 'value' into [target_language] and return every item with its original 'name' and 'isTranslatable' flag.",
    "Values may contain markup such as <b>, <xliff:g> or CDATA sections, entity references and format placeholders such as %s or %1$d.",
    "Keep markup, entity references and placeholders exactly as they appear in the source, and only translate the surrounding text.",
    ])

default_prompt = linesep.join([
    "Source JSON:",
    "```",
    "[source_json]",
    "```",
    "",
    "Also, place the JSON you have previously translated for reference only.",
    "Use your previous translation as is, unless there are significant differences from the original.",
    "```",
    "[existing_json]",
    "```",
    ])

class Instructions:
    """
    System instruction and user prompt templates used to request a translation
    """
    def __init__(self, settings : dict):
        self.InitialiseInstructions(settings)

    def GetSettings(self) -> dict:
        """ Generate the settings for these instructions """
        return {
            'prompt': self.prompt,
            'instructions': self.instructions,
            'instruction_file': self.instruction_file,
        }

    def InitialiseInstructions(self, settings : dict):
        self.prompt : str = settings.get('prompt') or default_prompt
        self.instructions : str = settings.get('instructions') or default_instructions
        self.instruction_file : str|None = settings.get('instruction_file') or None

        # Add any additional instructions from the command line
        if settings.get('instruction_args'):
            additional_instructions = linesep.join(settings['instruction_args'])
            if additional_instructions:
                self.instructions = linesep.join([self.instructions, additional_instructions])

    def LoadInstructionsFile(self, filepath : str):
        """
        Load instructions from a text file with ### prompt and ### instructions sections.

        A file without section headers is treated as the instructions alone.
        """
        if not os.path.exists(filepath):
            raise ValueError(f"Instruction file not found: {filepath}")

        with open(filepath, "r", encoding="utf-8") as f:
            lines = [l.rstrip() for l in f.readlines()]

        if not lines:
            return

        if not lines[0].startswith('###'):
            logging.info(f"Loading plain instruction file: {filepath}")
            self.instructions = linesep.join(lines).strip()
            self.instruction_file = os.path.basename(filepath)
            return

        sections : dict[str, list[str]] = {}
        section_name = None
        for line in lines:
            if line.startswith('###'):
                section_name = line[3:].strip()
                sections[section_name] = []
            elif section_name and (line.strip() or sections[section_name]):
                sections[section_name].append(line)

        self.prompt = linesep.join(sections.get('prompt', [])).strip() or self.prompt
        self.instructions = linesep.join(sections.get('instructions', [])).strip()
        self.instruction_file = os.path.basename(filepath)

        if not self.instructions:
            raise ValueError("Invalid instruction file")

def ReplaceTags(text : str, tags : dict[str, str]) -> str:
    """
    Replace [tag] markers in a string with the corresponding value, in a single pass
    so that substituted values are never scanned for further tags.
    """
    if not text:
        return text

    return regex.sub(r"\[(\w+)\]", lambda match: str(tags[match.group(1)]) if match.group(1) in tags else match.group(0), text)
