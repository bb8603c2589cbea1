"""
Couche infrastructure : persistance SQLModel.
"""
