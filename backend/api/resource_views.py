"""Routes shared by every resource kind.

    GET    /api/<resource>/        list (query params filter on declared fields;
                                   includeInactive=true shows soft-deleted rows)
    POST   /api/<resource>/        create
    GET    /api/<resource>/<id>/   read
    PUT    /api/<resource>/<id>/   partial update
    PATCH  /api/<resource>/<id>/   partial update
    DELETE /api/<resource>/<id>/   delete (hard or soft, per resource)

The URLconf passes the registry name as the `resource` kwarg.
"""

from django.views.decorators.csrf import csrf_exempt

from api.crud import CrudEngine
from api.errors import api_view, parse_json_body
from api.registry import Flag, get_resource
from api.views import ok

_INCLUDE_INACTIVE = "includeInactive"


@csrf_exempt
@api_view("GET", "POST")
def collection(request, resource):
    res = get_resource(resource)
    engine = CrudEngine(res)

    if request.method == "POST":
        record = engine.create(parse_json_body(request))
        return ok(201, f"{res.label} created successfully", **{res.item_key: record})

    filters = request.GET.dict()
    include_inactive = Flag().clean(_INCLUDE_INACTIVE, filters.pop(_INCLUDE_INACTIVE, None)) or False
    records = engine.list(filters, include_inactive=include_inactive)
    return ok(**{res.list_key: records})


@csrf_exempt
@api_view("GET", "PUT", "PATCH", "DELETE")
def detail(request, resource, pk):
    res = get_resource(resource)
    engine = CrudEngine(res)

    if request.method == "GET":
        return ok(**{res.item_key: engine.read(pk)})

    if request.method == "DELETE":
        engine.delete(pk)
        return ok(200, f"{res.label} deleted successfully")

    record = engine.update(pk, parse_json_body(request))
    return ok(200, f"{res.label} updated successfully", **{res.item_key: record})
