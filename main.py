import sys

from enviro.main import main

if __name__ == "__main__":
    sys.exit(main())
