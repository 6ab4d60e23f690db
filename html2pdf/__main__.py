"""Run the service with ``python -m html2pdf``."""

from html2pdf.server import main

if __name__ == "__main__":
    main()
