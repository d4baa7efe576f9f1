"""Entry point for running the preprocessor as a module.

Usage:
    python -m shrup INPUT OUTPUT
"""

from shrup.cli import main

if __name__ == "__main__":
    main()
