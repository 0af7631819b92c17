"""Building blocks shared by the HTTP-facing apps.

- Service error taxonomy (``exceptions``)
- Size-capped request body readers (``http``)
- Error translation at the HTTP boundary (``middleware``)
"""
