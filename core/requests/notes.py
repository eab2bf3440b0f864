from core.permissions import AllowAuthenticated, NoteableTargetExists
from core.requests.base import MutationRequest
from core.validation import Field, String


class StoreNoteRequest(MutationRequest):
    """Unknown note targets are refused by the gate, before the content is looked at."""
    name = 'store note'
    gate = AllowAuthenticated() & NoteableTargetExists()
    fields = [Field('content', String(max=1000, sanitize=True))]


class ViewNotesRequest(MutationRequest):
    """Listing notes passes the same gate as writing one."""
    name = 'view notes'
    gate = StoreNoteRequest.gate
