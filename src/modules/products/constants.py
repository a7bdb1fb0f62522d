"""Product catalogue constants."""

from decimal import Decimal

from django.db import models


class ProductName(models.TextChoices):
    RACKET = "RACKET", "Racket"
    BALL = "BALL", "Ball"
    NET = "NET", "Net"
    SHOE = "SHOE", "Shoe"


class ProductCategory(models.TextChoices):
    PROFESSIONAL = "PROFESSIONAL", "Professional"
    TRAINING = "TRAINING", "Training"
    RECREATIONAL = "RECREATIONAL", "Recreational"


MIN_PRODUCT_PRICE = Decimal("0")

# Largest stock count the integer columns accept on every supported backend.
MAX_STOCK_QUANTITY = 2_147_483_647
