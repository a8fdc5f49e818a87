"""
Test suite for the html_layout project.
"""
