"""Collaborative playlist pages with invitation-based sharing."""

from __future__ import annotations

import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import login_required

from spotie.auth import current_email
from spotie.domain.sharing import OWNER
from spotie.exceptions import InvitationError
from spotie.interfaces.http.helpers import get_catalog_service, get_sharing_service, require_param

logger = logging.getLogger(__name__)

playlists_bp = Blueprint('playlists', __name__, url_prefix='/playlists')


def _checkbox(name: str) -> bool:
    return (request.form.get(name) or '').strip().lower() in {'1', 'true', 'on', 'yes'}


@playlists_bp.route('', methods=['GET'])
@login_required
def list_playlists():
    sharing = get_sharing_service()
    email = current_email()
    return render_template(
        'playlists/index.html',
        title="Playlists",
        owned=sharing.playlists.get_playlists_of_user(email),
        shared=sharing.shared_with(email),
    )


@playlists_bp.route('', methods=['POST'])
@login_required
def create_playlist():
    name = (request.form.get('name') or '').strip()
    if not name:
        flash("A playlist needs a name.", "danger")
        return redirect(url_for('playlists.list_playlists'))

    playlist = get_sharing_service().playlists.create_playlist(current_email(), name)
    return redirect(url_for('playlists.show_playlist', playlist_id=playlist.id))


@playlists_bp.route('/<string:playlist_id>', methods=['GET'])
@login_required
def show_playlist(playlist_id: str):
    sharing = get_sharing_service()
    email = current_email()
    playlist = sharing.playlists.get_playlist(playlist_id)
    role = sharing.require_role(playlist, email)

    tracks = get_catalog_service().tracks(playlist.tracks) if playlist.tracks else []
    invites = sharing.invites.get_invites_of_playlist(email, playlist.id) if role == OWNER else []
    return render_template(
        'playlists/show.html',
        title=playlist.name,
        playlist=playlist,
        role=role,
        tracks=tracks,
        invites=invites,
    )


@playlists_bp.route('/<string:playlist_id>/delete', methods=['POST'])
@login_required
def delete_playlist(playlist_id: str):
    sharing = get_sharing_service()
    playlist = sharing.playlists.get_playlist(playlist_id)
    sharing.delete_playlist(playlist, current_email())
    flash(f"Playlist '{playlist.name}' deleted.", "success")
    return redirect(url_for('playlists.list_playlists'))


@playlists_bp.route('/<string:playlist_id>/tracks', methods=['POST'])
@login_required
def add_track(playlist_id: str):
    sharing = get_sharing_service()
    playlist = sharing.playlists.get_playlist(playlist_id)
    sharing.require_role(playlist, current_email(), write=True)

    track_id = require_param(request.form.get('track_id'), 'track id')
    # Resolve first so unknown ids never reach the playlist
    track = get_catalog_service().track(track_id)
    if playlist.add_track(track.id):
        sharing.playlists.update_playlist(playlist)
        flash(f"'{track.name}' added to {playlist.name}.", "success")
    else:
        flash(f"'{track.name}' is already in {playlist.name}.", "info")
    return redirect(url_for('playlists.show_playlist', playlist_id=playlist.id))


@playlists_bp.route('/<string:playlist_id>/tracks/<string:track_id>/delete', methods=['POST'])
@login_required
def remove_track(playlist_id: str, track_id: str):
    sharing = get_sharing_service()
    playlist = sharing.playlists.get_playlist(playlist_id)
    sharing.require_role(playlist, current_email(), write=True)

    if playlist.remove_track(track_id):
        sharing.playlists.update_playlist(playlist)
    return redirect(url_for('playlists.show_playlist', playlist_id=playlist.id))


@playlists_bp.route('/<string:playlist_id>/invites', methods=['POST'])
@login_required
def send_invite(playlist_id: str):
    sharing = get_sharing_service()
    playlist = sharing.playlists.get_playlist(playlist_id)
    to_email = request.form.get('email') or ''
    try:
        invite = sharing.invite(playlist, current_email(), to_email, _checkbox('writable'))
    except InvitationError as exc:
        flash(str(exc), "danger")
    else:
        flash(f"Invitation sent to {invite.to_email}.", "success")
    return redirect(url_for('playlists.show_playlist', playlist_id=playlist.id))


@playlists_bp.route('/<string:playlist_id>/invites/<string:invite_id>/delete', methods=['POST'])
@login_required
def revoke_invite(playlist_id: str, invite_id: str):
    get_sharing_service().revoke(invite_id, current_email(), playlist_id=playlist_id)
    flash("Invitation revoked.", "success")
    return redirect(url_for('playlists.show_playlist', playlist_id=playlist_id))
