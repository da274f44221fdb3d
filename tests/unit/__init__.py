"""Unit tests for individual components in isolation.

Coverage:
    - PDF and spreadsheet extraction
    - Word document synthesis
    - Mail configuration and SMTP delivery (smtplib mocked)
    - File cleanup scheduling
    - Conversion pipeline states and cleanup guarantees
"""
