"""Manages personal notes stored as plain files under a single root directory.

If you installed via ``pip``, run ``clife -h`` to get help.

To use the Python API, look at :class:`clife.api.Clife`
"""
