"""App runner: import and run gazecursor.main.main()."""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from gazecursor.main import main

if __name__ == "__main__":
    raise SystemExit(main())
