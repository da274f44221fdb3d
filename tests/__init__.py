"""Test package for the conversion service.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP-level tests of the whole pipeline

PDF and workbook fixtures are generated on the fly with reportlab and
openpyxl. SMTP is replaced by a recording mail sender; everything else
runs for real against temporary directories.
Leverages pytest with pytest-check for soft assertions.
"""
