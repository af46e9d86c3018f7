#!filepath: qforest/__main__.py
from qforest.cli import main

if __name__ == "__main__":
    main()

# python -m qforest --file data.csv --depvarname y --ntree 100
