"""
Command line interface for propcheck.

    propcheck <filename>   check the theorem of a proposition file
"""
