"""
Services built on top of the Ecwid HTTP clients.
"""
