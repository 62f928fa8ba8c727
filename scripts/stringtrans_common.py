import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PyStrings.Helpers.Resources import config_dir
from PyStrings.Options import Options
from PyStrings.ResourceProject import ResourceProject
from PyStrings.ResourceTranslator import ResourceTranslator
from PyStrings.TranslationProvider import TranslationProvider

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        file_handler.setFormatter(formatter)
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create new arg parser and parse shared command line arguments between providers
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('--basedir', type=str, required=True, help="Directory containing the values[-lang] resource folders")
    parser.add_argument('-l', '--target_languages', type=str, required=True, help="Comma separated list of languages to translate into, e.g. fr,de,pt-rBR")
    parser.add_argument('--source_language', type=str, default=None, help="Language tag of the source folder (leave empty for the untagged folder)")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    parser.add_argument('--entrytag', type=str, default=None, help="Element name of string entries (default: entry)")
    parser.add_argument('--filename', type=str, default=None, help="Name of the resource file in each folder (default: strings.xml)")
    parser.add_argument('--instruction', action='append', type=str, default=None, help="An additional instruction for the AI translator")
    parser.add_argument('--instructionfile', type=str, default=None, help="Name/path of a file to load instructions from")
    parser.add_argument('--overwrite_on_error', action='store_true', default=None, help="Write the target file without translations when a language fails")
    parser.add_argument('--ratelimit', type=float, default=None, help="Maximum number of requests per minute")
    parser.add_argument('--stop_on_error', action='store_true', default=None, help="Stop processing further languages after a failure")
    parser.add_argument('--temperature', type=float, default=None, help="A higher temperature increases the random variance of translations")
    parser.add_argument('--timeout', type=float, default=None, help="Request timeout in minutes (default: 3)")
    return parser

def CreateOptions(args: Namespace, provider: str, **kwargs) -> Options:
    """ Create options with additional arguments """
    options = {
        'api_key': args.apikey,
        'base_dir': args.basedir,
        'entry_tag': args.entrytag,
        'instruction_args': args.instruction,
        'instruction_file': args.instructionfile,
        'overwrite_on_error': args.overwrite_on_error,
        'provider': provider,
        'rate_limit': args.ratelimit,
        'resource_filename': args.filename,
        'source_language': args.source_language,
        'stop_on_error': args.stop_on_error,
        'target_languages': args.target_languages,
        'temperature': args.temperature,
        'timeout': args.timeout,
    }

    # Adding optional new keys from kwargs
    for key, value in kwargs.items():
        options[key] = value

    return Options(options)

def CreateTranslator(options : Options) -> ResourceTranslator:
    """
    Initialise a resource translator with the provided options
    """
    translation_provider = TranslationProvider.get_provider(options)
    if not translation_provider:
        raise ValueError(f"Unable to create translation provider {options.provider}")

    if not translation_provider.ValidateSettings():
        logging.error(f"Provider settings are not valid: {translation_provider.validation_message}")
        raise ValueError(f"Invalid settings for provider {options.provider}")

    logging.info(f"Using translation provider {translation_provider.name}")

    # Load the instructions
    options.InitialiseInstructions()

    return ResourceTranslator(options, translation_provider)

def CreateProject(options : Options) -> ResourceProject:
    """
    Initialise a resource project and check that the source resources can be read
    """
    project = ResourceProject(options)

    source = project.LoadSource()

    logging.info(f"Translating {source.entrycount} strings from {project.source.path if project.source else project.base_dir} into {', '.join(options.target_languages)}")

    return project
