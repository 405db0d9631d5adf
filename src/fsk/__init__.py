"""Keeps personal notes as plain Markdown files in a folder hierarchy.

If you installed via ``pip``, run ``fsk -h`` to get help.
Or, run ``python3 -m fsk -h``.

To use the Python API, look at :class:`fsk.store.Store`, which you can get from
``FskConf.for_user().instantiate()``.
"""
