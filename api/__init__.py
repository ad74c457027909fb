"""
API - Shared REST framework plumbing (errors, pagination).
"""
