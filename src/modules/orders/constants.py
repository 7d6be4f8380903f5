"""Order domain constants.

Status values are stored in Portuguese, exactly as the checkout and the
admin panel write them.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CONFIRMED = "confirmado", "Confirmado"
    AWAITING_PAYMENT = "aguardando_pagamento", "Aguardando Pagamento"
    CANCELLED = "cancelado", "Cancelado"
    KITS_BEING_PICKED_UP = "kits_sendo_retirados", "Kits sendo Retirados"
    IN_TRANSIT = "em_transito", "Em Trânsito"
    DELIVERED = "entregue", "Entregue"


class PaymentMethod(models.TextChoices):
    CREDIT = "credit", "Cartão de Crédito"
    DEBIT = "debit", "Cartão de Débito"
    PIX = "pix", "PIX"


ORDER_NUMBER_PREFIX = "KR"
ORDER_NUMBER_MAX_RETRIES = 5
