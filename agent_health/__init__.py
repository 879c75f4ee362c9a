"""
Agent Health
File-based health reporting for supervised agent processes.
"""

__version__ = "0.1.0"
