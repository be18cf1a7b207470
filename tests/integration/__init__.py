"""
Integration tests for the ZipTax SDK.

Run against the live API and are skipped unless ZIPTAX_API_KEY is set.
"""
