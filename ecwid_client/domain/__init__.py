"""
Domain layer: order status vocabularies and response models.
"""
