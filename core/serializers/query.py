from django.conf import settings
from django.core.paginator import Paginator
from rest_framework import serializers

from core.resources.base import check_includes


class IncludeQuerySerializer(serializers.Serializer):
    """``?include=a,b``; ``includes`` names the relations the transformer knows."""
    include = serializers.CharField(required=False, allow_blank=True, default='')

    def __init__(self, *args, includes=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.includes = includes

    def validate_include(self, v):
        names = [part.strip() for part in (v or '').split(',') if part.strip()]
        try:
            return check_includes(names, self.includes)
        except ValueError as exc:
            raise serializers.ValidationError(str(exc)) from None


class ListQuerySerializer(IncludeQuerySerializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    page_size = serializers.IntegerField(required=False, min_value=1)

    def validate_page_size(self, v):
        if v > settings.PAGE_SIZE_MAX:
            raise serializers.ValidationError(f'at most {settings.PAGE_SIZE_MAX}')
        return v


def parse_query(request, *, includes=(), detail=False) -> dict:
    serializer_class = IncludeQuerySerializer if detail else ListQuerySerializer
    q = serializer_class(data=request.query_params, includes=includes)
    q.is_valid(raise_exception=True)
    return q.validated_data


def paginate(qs, query: dict, transform) -> dict:
    page_size = query.get('page_size') or settings.PAGE_SIZE_DEFAULT
    paginator = Paginator(qs, page_size)
    page = paginator.get_page(query.get('page') or 1)
    include = query.get('include') or ()
    return {
        'data': [transform(obj, include=include) for obj in page.object_list],
        'meta': {
            'page': page.number,
            'page_size': page_size,
            'total': paginator.count,
            'last_page': paginator.num_pages,
        },
    }
