"""
Campus Page Routes

Serves the campus page with its map, and search suggestions as JSON.
"""

from flask import Blueprint, jsonify, render_template, request, url_for

from campus import MapViewController, Page, SearchBox, SuggestionEngine, UILoop
from campus.data import BASEMAPS, CATEGORIES, CATEGORY_NAMES
from campus.map_controller import HIGHLIGHT_SECONDS, MODE_3D

campus_bp = Blueprint('campus', __name__)

suggestion_engine = SuggestionEngine()

PAGE_ARGS = ('q', 'category', 'basemap', 'view', 'zoom')
MAX_ZOOM_STEPS = 22


def _zoom_steps(value):
    try:
        steps = int(value)
    except (TypeError, ValueError):
        return 0
    return max(-MAX_ZOOM_STEPS, min(MAX_ZOOM_STEPS, steps))


def _page_url(state, **changes):
    """URL of the campus page with the current view state plus ``changes``."""
    args = dict(state, **changes)
    return url_for('campus.index', **{k: v for k, v in args.items() if v not in (None, '', 0)})


@campus_bp.route('/')
def index():
    """
    Campus page. ``?q=`` runs a search and ``?category=`` filters the map,
    the same way the search box and quick-link cards do. ``?basemap=``,
    ``?view=3d`` and ``?zoom=<steps>`` carry the map controls' state, so each
    control is a link to the page with one of them changed.
    """
    page = Page.campus()
    loop = UILoop()
    controller = MapViewController(page, loop)
    controller.start()
    search = SearchBox.bind(page, controller, suggestion_engine)

    state = {key: request.args.get(key, '').strip() for key in PAGE_ARGS}
    state['category'] = state['category'].lower()
    state['zoom'] = _zoom_steps(state['zoom'])

    if state['basemap'] in BASEMAPS:
        controller.set_basemap(state['basemap'])

    query = state['q']
    suggestions = None
    found = None
    if state['category']:
        controller.show_category(state['category'])
    elif query:
        suggestions = search.on_input(query)
        found = search.perform_search()

    if state['view'] == MODE_3D:
        controller.toggle_3d()
    for _ in range(abs(state['zoom'])):
        if state['zoom'] > 0:
            controller.zoom_in()
        else:
            controller.zoom_out()

    in_3d = controller.mode == MODE_3D
    links = {
        'zoom_in': _page_url(state, zoom=state['zoom'] + 1),
        'zoom_out': _page_url(state, zoom=state['zoom'] - 1),
        'toggle_3d': _page_url(state, view=None if in_3d else MODE_3D),
        'basemaps': {key: _page_url(state, basemap=key) for key in BASEMAPS},
    }

    return render_template(
        'index.html',
        page=page,
        categories=[(c, CATEGORY_NAMES[c]) for c in CATEGORIES],
        query=query,
        suggestions=suggestions,
        found=found,
        current_category=controller.current_category,
        basemaps=BASEMAPS.values(),
        links=links,
        highlight_seconds=HIGHLIGHT_SECONDS,
        map_html='' if in_3d else controller.map2d.to_folium()._repr_html_(),
        map3d=controller.map3d if in_3d else None,
        map3d_html=controller.map3d.to_folium(controller.map2d)._repr_html_() if in_3d else '',
    )


@campus_bp.route('/api/search/suggestions')
def suggestions():
    """Suggestions for a partial query: categories first, then locations."""
    result = suggestion_engine.suggest(request.args.get('q', ''))
    return jsonify({
        'ok': True,
        'categories': [{'category': c.category, 'label': c.label} for c in result.categories],
        'locations': list(result.locations),
    })
