import sys

from repeater_watcher.cli import main

if __name__ == "__main__":
    sys.exit(main())
