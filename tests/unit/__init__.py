"""
Unit tests for the ZipTax SDK.

Test individual components in isolation:
- Retry policy and engine (attempt counts, backoff delays, predicate)
- Error classifier (status mapping, message extraction, retry-after)
- HTTP client (httpx MockTransport, retry composition, logging hooks)
- ZiptaxClient (parameter validation, query construction)
- Validation helpers, configuration, error taxonomy
"""
