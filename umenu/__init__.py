"""
UMenu taste search.

Matches restaurant menu items to a free-text taste description plus the
user's allergen and dietary constraints.
"""
