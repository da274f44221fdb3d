"""Integration tests for the service working as a system.

Drives POST /convert through httpx's ASGI transport with real files,
real extraction and real .docx output. Only the SMTP transport is
replaced, by a sender that records what it was asked to deliver.
"""
