"""
Mapping services. Each service is stateless after construction.
"""
