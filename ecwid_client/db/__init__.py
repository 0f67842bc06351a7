"""
Remote data access: HTTP clients for the Ecwid API.
"""
