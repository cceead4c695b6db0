import sys

from s3copy.cli import main

if __name__ == "__main__":
    sys.exit(main())
