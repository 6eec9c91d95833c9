"""Invitations received by the signed-in user."""

from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, url_for
from flask_login import login_required

from spotie.auth import current_email
from spotie.interfaces.http.helpers import get_sharing_service

invites_bp = Blueprint('invites', __name__, url_prefix='/user/invites')


@invites_bp.route('', methods=['GET'])
@login_required
def pending_invites():
    sharing = get_sharing_service()
    pending = sharing.invites.get_pending_invitations_of_user(current_email())
    playlists = {
        playlist.id: playlist
        for playlist in sharing.playlists.get_playlists_by_ids(invite.playlist_id for invite in pending)
    }
    return render_template('user/invites.html', title="Invitations", invites=pending, playlists=playlists)


@invites_bp.route('/<string:invite_id>/accept', methods=['POST'])
@login_required
def accept_invite(invite_id: str):
    invite = get_sharing_service().accept(invite_id, current_email())
    flash("Invitation accepted.", "success")
    return redirect(url_for('playlists.show_playlist', playlist_id=invite.playlist_id))


@invites_bp.route('/<string:invite_id>/decline', methods=['POST'])
@login_required
def decline_invite(invite_id: str):
    get_sharing_service().decline(invite_id, current_email())
    flash("Invitation declined.", "info")
    return redirect(url_for('invites.pending_invites'))
