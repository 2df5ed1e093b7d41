"""
Ambient infrastructure shared by every command: settings, errors, logging.
"""
