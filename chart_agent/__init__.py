"""
Chart Agent - conversational bar and line charts in FD and BNR house colors.
"""

__version__ = "0.1.0"
