"""Entry point functions for llm-stringtrans command line tools."""

import os
import sys
import logging

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)


def gpt_stringtrans(argv : list[str]|None = None) -> int:
    """Entry point for gpt-stringtrans command."""
    from scripts.stringtrans_common import InitLogger, CreateArgParser, CreateOptions, CreateTranslator, CreateProject
    from PyStrings.Helpers.Localization import initialize_localization
    from PyStrings.Options import Options
    from PyStrings.ResourceError import ResourceError
    from PyStrings.ResourceProject import ResourceProject, TranslationRunResult
    from PyStrings.ResourceTranslator import ResourceTranslator

    # Other providers would get their own entry point
    provider = "OpenAI"
    default_model = os.getenv('OPENAI_MODEL') or "o3-mini"

    parser = CreateArgParser(f"Translates XML string resources into other languages using an OpenAI model")
    parser.add_argument('-k', '--apikey', type=str, default=None, help=f"Your OpenAI API Key (https://platform.openai.com/account/api-keys)")
    parser.add_argument('-b', '--apibase', type=str, default="https://api.openai.com/v1", help="API backend base address.")
    parser.add_argument('-m', '--model', type=str, default=None, help="The model to use for translation")
    parser.add_argument('--httpx', action='store_true', help="Use the httpx library for custom api_base requests. May help if you receive a 307 redirect error.")
    parser.add_argument('--proxy', type=str, default=None, help="Proxy URL (e.g., socks5://127.0.0.1:1089)")
    args = parser.parse_args(argv)

    logger_options = InitLogger("gpt-stringtrans", args.debug)

    try:
        options : Options = CreateOptions(
            args,
            provider,
            use_httpx=args.httpx,
            api_base=args.apibase,
            proxy=args.proxy,
            model=args.model or default_model
        )

        initialize_localization(options.get_str('ui_language'))

        # Create a translator with the provided options
        translator : ResourceTranslator = CreateTranslator(options)

        # Create a project for the resource directory
        project : ResourceProject = CreateProject(options)

        # Translate the resources
        result : TranslationRunResult = project.TranslateResources(translator)

        logging.info(str(result))
        logging.info(f"Log written to {logger_options.log_path}")

        return 0 if result.succeeded else 1

    except (ResourceError, ValueError, OSError) as e:
        logging.debug("Fatal error", exc_info=True)
        print("Error:", e)
        return 1

def main():
    sys.exit(gpt_stringtrans())

if __name__ == "__main__":
    main()
