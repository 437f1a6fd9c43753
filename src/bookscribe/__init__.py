"""BookScribe: select PDF pages, extract their text, and assemble new PDFs.

Subpackages:
* ``bookscribe.pdf`` – extraction, OCR fallback and page assembly adapters.
* ``bookscribe.api`` – FastAPI application driving an editing session.
"""

__version__ = "0.1.0"
