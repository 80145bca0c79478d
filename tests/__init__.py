"""
poly-observability-mcp Test Suite

Covers the gateway core with in-process adapters:
- Tool registry aggregation and duplicate detection
- Dispatch, argument validation and error envelopes
- Adapter lifecycle with partial connection failures
- HTTP and MCP stdio transports
"""
