"""
Services talking to the Auth0 Management API.
"""
