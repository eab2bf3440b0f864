from django.contrib.contenttypes.models import ContentType

from core.models import Note, User
from core.notes import NoteableType
from core.store import store


def target_of(kind: NoteableType, pk):
    return store.find(kind.collection, pk)


def notes_for(target):
    return (
        Note.objects
        .filter(content_type=ContentType.objects.get_for_model(target), object_id=target.pk)
        .select_related('user')
        .order_by('-created_at', '-id')
    )


def add_note(target, user: User, content: str) -> Note:
    return store.save(Note(notable=target, user=user, content=content))
