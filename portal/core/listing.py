"""
List fetching and local mutations shared by the component services
"""
from portal.core import store
from portal.core.api_client import current_client
from portal.core.auth import session_id


def view_slice(name):
    """The calling session's cached copy of a list view"""
    return store.slice(session_id() or 'anonymous', name)


def fetch_list(slice_name, endpoint, query, client=None):
    """Fetch one page for a list view and remember it for later mutations"""
    client = client or current_client()
    page = client.get_page(endpoint, params=query.to_params())
    view_slice(slice_name).put(query, page)
    return page


def mutate(slice_name, item_id, endpoint, payload=None, changes=None, remove=False,
           method='POST', client=None):
    """Send an action, then reflect it in the cached list without refetching

    The local change is applied only after the request succeeds; if it
    raises, the cached list is left untouched. When the row is not in the
    cached page the reply still carries the changed fields, and `removed`
    tells the page whether to drop the row.
    """
    client = client or current_client()
    if method == 'DELETE':
        result = client.delete(endpoint)
    else:
        result = client.request(method, endpoint, data=payload if payload is not None else {})

    view = view_slice(slice_name)
    item = None
    removed = False
    if remove:
        view.remove_item(item_id)
        removed = True
    elif changes:
        item = view.update_item(item_id, **changes) or {'id': item_id, **changes}

    page = view.get()
    return {
        'message': (result or {}).get('message', 'OK') if isinstance(result, dict) else 'OK',
        'item': item,
        'removed': removed,
        'list': page.to_dict() if page is not None else None,
    }
