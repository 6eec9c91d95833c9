import logging

from flask import Blueprint, render_template, request
from flask_login import current_user

from spotie.exceptions import DocumentStoreError
from spotie.interfaces.http.helpers import (
    get_catalog_service,
    get_settings,
    get_sharing_service,
    read_pagination,
    require_param,
)

logger = logging.getLogger(__name__)

catalog_bp = Blueprint('catalog', __name__)


@catalog_bp.app_template_filter('page_of')
def page_of(offset: int, limit: int) -> int:
    """1-indexed page holding ``offset``; negative offsets land on page 1."""
    return max(0, offset) // limit + 1


def _own_playlists():
    """Playlists the signed-in user can add tracks to from catalog pages."""
    if not getattr(current_user, 'is_authenticated', False):
        return []
    try:
        return get_sharing_service().playlists.get_playlists_of_user(current_user.email)
    except DocumentStoreError as exc:
        logger.warning("Playlist picker unavailable: %s", exc)
        return []


@catalog_bp.route('/', methods=['GET'])
def home():
    return render_template('home.html', title="Homepage")


@catalog_bp.route('/search', methods=['GET'], defaults={'query': None})
@catalog_bp.route('/search/<path:query>', methods=['GET'])
def search(query):
    """Artist search from ``?q=`` or the path, paginated with ``page``/``limit``."""
    artist = require_param(request.args.get('q') or query, 'artist query')
    page, limit = read_pagination(get_settings().search_page_size)

    collection = get_catalog_service().search_artists(artist, page, limit)
    return render_template(
        'catalog/search.html',
        title=f"{collection.total} Results for {artist}",
        query=artist,
        collection=collection,
    )


@catalog_bp.route('/artists/', methods=['GET'], defaults={'artist_id': None})
@catalog_bp.route('/artists/<string:artist_id>', methods=['GET'])
def artist(artist_id):
    """Artist profile with a page of albums."""
    artist_id = require_param(artist_id, 'artist id')
    page, limit = read_pagination(get_settings().artist_albums_page_size)

    details = get_catalog_service().artist_with_albums(artist_id, page, limit)
    logger.info("Fetched details for artist: %s", details.name)
    return render_template('catalog/artist.html', title=details.name, artist=details)


@catalog_bp.route('/albums/', methods=['GET'], defaults={'album_id': None})
@catalog_bp.route('/albums/<string:album_id>', methods=['GET'])
def album(album_id):
    """Album with its first page of tracks (up to 50, not paginated)."""
    album_id = require_param(album_id, 'album id')

    details = get_catalog_service().album(album_id)
    return render_template(
        'catalog/album.html',
        title=details.name,
        album=details,
        playlists=_own_playlists(),
    )


@catalog_bp.route('/tracks/<string:track_id>', methods=['GET'])
def track(track_id):
    details = get_catalog_service().track(track_id)
    return render_template(
        'catalog/track.html',
        title=details.name,
        track=details,
        playlists=_own_playlists(),
    )
