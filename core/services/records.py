from django.db import models

from core.store import store


def create_record(model: type[models.Model], data: dict, **extra) -> models.Model:
    return store.save(model(**data, **extra))


def update_record(record: models.Model, data: dict) -> models.Model:
    """Apply the accepted keys only; absent keys keep their stored value."""
    for key, value in data.items():
        setattr(record, key, value)
    return store.save(record)


def next_number(model: type[models.Model], column: str, prefix: str) -> str:
    """``<prefix>000001``-style document number following the newest row."""
    last = model.objects.order_by('-id').values_list('id', flat=True).first() or 0
    number = last + 1
    while model.objects.filter(**{column: f'{prefix}{number:06d}'}).exists():
        number += 1
    return f'{prefix}{number:06d}'
