"""
Agent Health Infrastructure
Process-level services that run alongside the instrumented agent.
"""
