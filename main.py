import sys

from price_forecaster.main import main

if __name__ == "__main__":
    sys.exit(main())
