"""Notes attached to lenses, products and appointments: ``/<type>/<id>/notes``."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.notes import NoteableType
from core.requests.notes import StoreNoteRequest, ViewNotesRequest
from core.resources.clinic import NOTE_INCLUDES, note_resource
from core.serializers.query import paginate, parse_query
from core.services import notes as service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def notes(request, **route):
    if request.method == 'POST':
        data = StoreNoteRequest.resolve(request, **route)
    else:
        ViewNotesRequest.resolve(request, **route)
    # the gate guarantees both the kind and the target
    target = service.target_of(NoteableType(route['type']), route['id'])
    if request.method == 'POST':
        note = service.add_note(target, request.user, data['content'])
        return Response({'data': note_resource(note, include=('user',))}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=NOTE_INCLUDES)
    return Response(paginate(service.notes_for(target), q, note_resource))
