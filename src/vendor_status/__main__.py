"""Allow running Vendor Status with ``python -m vendor_status``."""

from . import main

if __name__ == "__main__":
    main()
