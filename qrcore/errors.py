# -*- coding: utf-8 -*-
"""
Errors raised by the encoder.

Invalid parameters raise the built-in ValueError; running out of symbol
capacity raises DataTooLongError, which is a ValueError too so front ends
can handle both in one place.
"""


class DataTooLongError(ValueError):
    """
    The data does not fit any QR Code version in the allowed range at the
    requested error correction level.

    Ways to handle it: lower the error correction level, raise the maximum
    version, pick a more compact segment mode, or shorten the data.
    """
