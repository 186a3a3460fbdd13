import sys

from note_scraper.main import main

if __name__ == "__main__":
    sys.exit(main())
