"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, blob storage, settings, logging, errors). Keep resource-specific
SQL in the corresponding feature package (e.g. `banners/`).
"""
