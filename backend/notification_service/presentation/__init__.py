"""
PRESENTATION LAYER - HTTP, RPC and WebSocket entry points

Thin adapters: parse the request, build a command/query, call the handler,
shape the response. No business rules live here.
"""
