"""
Request tree core: filesystem adapter, request records, tree manager,
imports and workspace handling.
"""
