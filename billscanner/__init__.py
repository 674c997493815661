"""
Bill Scanner AI
---------------

Photograph a receipt, let a vision model read it, review the fields and push
the confirmed record to a Google Sheet through an Apps Script web app.
"""

__version__ = "0.1.0"
