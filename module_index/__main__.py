"""Entry point for running module-index as a module.

This allows the package to be executed as:
    python -m module_index

It delegates to the CLI main function.
"""

from module_index.cli.main import main

if __name__ == "__main__":
    main()
