"""
PxPay Client Tests

Test suite for the PxPay hosted payment page client:
- Tag stream path resolution
- Request validation and serialization
- Gateway reply decoding
- Client round trips over a mocked transport
- Configuration and logging
"""
