"""NiceGUI interface - thin upload page for the conversion service.

Responsibilities:
    - Drop zone and file picker for a single PDF or spreadsheet
    - Email address field
    - Submission to POST /convert and display of the returned message

Contains no business logic. Delegates all operations to the API.
"""
