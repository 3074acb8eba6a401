"""Package entry point for ``python -m filewrap``.

WHY: Build rules invoke the tool as ``python -m filewrap PACKAGE NAME ...``
when no console script is installed on the build host.

HOW: Delegates to the CLI's main() function.

RULES:
- Exit status comes from main(): 0, 1 on a fatal embedding error, 2 on
  bad arguments
- Imports the CLI lazily so ``import filewrap.__main__`` has no effects
"""

if __name__ == "__main__":
    from filewrap.cli import main
    main()
