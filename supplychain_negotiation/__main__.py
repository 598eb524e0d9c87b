"""Allow running as: python -m supplychain_negotiation"""

from supplychain_negotiation.main import run, serve
import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        serve()
    elif len(sys.argv) > 1:
        run(sys.argv[1])
    else:
        print("usage: python -m supplychain_negotiation <request.json> | --serve")
        sys.exit(2)
