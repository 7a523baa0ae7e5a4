"""Allow running logfilter with python -m logfilter."""

from logfilter.cli import main

if __name__ == "__main__":
    main()
