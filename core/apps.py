from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Optica core'

    def ready(self):
        from core.lifecycle import observe
        from core.models import Prescription
        from core.notes import check_noteable_registry
        from core.observers import PrescriptionObserver
        from core.store import store

        observe(Prescription, PrescriptionObserver(store))
        check_noteable_registry(store)
