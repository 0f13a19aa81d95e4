"""
MedGuide Start - Main Entry Point

Sets up logging, builds the application once, runs the console loop and
disposes everything on exit.
"""

import logging
import sys

from medguide.app import MedGuideApp
from medguide.config import load_settings
from medguide.console import HELP_TEXT, handle_command
from medguide.memory import PersistenceWarning

logger = logging.getLogger(__name__)


def _print_warning(warning: PersistenceWarning):
    print(f"\n⚠  {warning}\n")


def main():
    """Main MedGuide entry point"""
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("=" * 70)
    print("MedGuide - Medicine Reminders & Information")
    print("=" * 70)
    print()

    app = MedGuideApp(settings, on_warning=_print_warning)
    try:
        app.init()
    except Exception as e:
        logger.error(f"Failed to initialize MedGuide: {e}", exc_info=True)
        print(f"\n❌ Error: {e}")
        return 1

    print(f"✓ Storage: {settings.storage_path}")
    print(f"✓ {app.reminders.summary()}")
    print()
    print(HELP_TEXT)
    print()

    try:
        while True:
            try:
                user_input = input("You: ").strip()
            except EOFError:
                print("\nGoodbye!")
                break

            if not user_input:
                continue

            if user_input.lower() in ["quit", "exit", "q"]:
                print("\nGoodbye!")
                break

            try:
                print(f"\n{handle_command(app, user_input)}\n")
            except Exception as e:
                logger.error(f"Error in main loop: {e}", exc_info=True)
                print(f"\nError: {e}\n")

    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")
    finally:
        app.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
