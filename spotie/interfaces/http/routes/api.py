"""JSON serialization of catalog entities for API consumers."""

import logging

from flask import Blueprint, jsonify, request

from spotie.interfaces.http.helpers import (
    get_catalog_service,
    get_settings,
    pagination_payload,
    read_pagination,
    require_param,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.route('/search_artists', methods=['GET'])
def search_artists_api():
    query = require_param(request.args.get('q'), 'artist query')
    page, limit = read_pagination(get_settings().search_page_size)

    collection = get_catalog_service().search_artists(query, page, limit)
    return jsonify({
        "query": query,
        "artists": [artist.model_dump(mode="json") for artist in collection.items],
        "pagination": pagination_payload(collection),
    }), 200


@api_bp.route('/artists/<string:artist_id>', methods=['GET'])
def artist_api(artist_id):
    page, limit = read_pagination(get_settings().artist_albums_page_size)

    artist = get_catalog_service().artist_with_albums(artist_id, page, limit)
    payload = artist.model_dump(mode="json", exclude={"albums"})
    payload["albums"] = [album.model_dump(mode="json") for album in artist.albums.items]
    payload["pagination"] = pagination_payload(artist.albums)
    return jsonify(payload), 200


@api_bp.route('/albums/<string:album_id>', methods=['GET'])
def album_api(album_id):
    album = get_catalog_service().album(album_id)
    payload = album.model_dump(mode="json", exclude={"tracks"})
    if album.tracks is None:
        payload["tracks"] = None
    else:
        payload["tracks"] = [track.model_dump(mode="json") for track in album.tracks.items]
        payload["pagination"] = pagination_payload(album.tracks)
    return jsonify(payload), 200
