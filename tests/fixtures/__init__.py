"""
Test fixtures for the ZipTax SDK.

Contains sample API payloads:
- sample_v60_response.json: Successful v60 rate lookup by address
- sample_account_metrics.json: Account metrics payload
"""
