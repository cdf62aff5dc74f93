"""
Services backing the translation providers.
"""
