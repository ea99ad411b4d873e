"""
Menu matching engine.

Responsibilities:
- Load the restaurant/menu catalog.
- Drop menu items that violate allergen, dietary or availability constraints.
- Score and rank meals and restaurants against parsed taste attributes.
- Return structured search results ready for API serialisation.
"""
