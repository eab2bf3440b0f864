"""
Model lifecycle observers.

An observer has one hook per :class:`LifecycleEvent`; all hooks are no-ops
unless a subclass overrides them.  :func:`observe` wires an observer to a
model through Django's ``post_save`` and ``post_delete`` signals.  Django
has no restore signal, so ``RESTORED`` is only reached through an explicit
:meth:`ModelObserver.dispatch` call.

Hooks run inside the caller's transaction and are not guarded: an
exception raised by a hook fails the save that triggered it.
"""
from __future__ import annotations

import enum

from django.db.models.signals import post_delete, post_save


class LifecycleEvent(enum.Enum):
    CREATED = 'created'
    UPDATED = 'updated'
    DELETED = 'deleted'
    RESTORED = 'restored'


class ModelObserver:
    def created(self, instance) -> None:
        pass

    def updated(self, instance) -> None:
        pass

    def deleted(self, instance) -> None:
        pass

    def restored(self, instance) -> None:
        pass

    def dispatch(self, event: LifecycleEvent, instance) -> None:
        getattr(self, event.value)(instance)


def observe(model, observer: ModelObserver) -> ModelObserver:
    """Connect ``observer`` to ``model``'s save/delete signals."""

    def on_save(sender, instance, created, raw=False, **kwargs):
        if raw:
            # fixture loading
            return
        observer.dispatch(LifecycleEvent.CREATED if created else LifecycleEvent.UPDATED, instance)

    def on_delete(sender, instance, **kwargs):
        observer.dispatch(LifecycleEvent.DELETED, instance)

    uid = f'{type(observer).__name__}:{model._meta.label}'
    post_save.connect(on_save, sender=model, weak=False, dispatch_uid=f'{uid}:save')
    post_delete.connect(on_delete, sender=model, weak=False, dispatch_uid=f'{uid}:delete')
    return observer
