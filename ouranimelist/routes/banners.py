"""
Banner Routes - the owner-scoped catalog commands
"""
import base64
import binascii
import logging

from flask import Blueprint, request
from flask_login import current_user

from ouranimelist.api_responses import not_found_response, page_response, success_response
from ouranimelist.auth import access_required
from ouranimelist.exceptions import ValidationException
from ouranimelist.extensions import get_catalog_store
from ouranimelist.routes._params import has_page_args, json_body, page_args
from ouranimelist.services.catalog_store import BannerData
from ouranimelist.services.release_schedule import format_countdown, time_until_release
from ouranimelist.utils import sanitize_sensitive_data

logger = logging.getLogger("main")

banners_bp = Blueprint("banners", __name__, url_prefix="/api/banners")


def _decode_image(value):
    if value is None:
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, TypeError, ValueError):
        raise ValidationException("image must be base64 encoded")


def _serialize(banners, include_image):
    return [banner.to_dict(include_image=include_image) for banner in banners]


def _include_image():
    return request.args.get("images", "true").lower() != "false"


@banners_bp.route("", methods=["POST"])
@access_required("user")
def add_banner():
    data = json_body()
    logger.debug(f"Add banner request from {current_user.name}: {sanitize_sensitive_data(data)}")
    banner = BannerData(
        title=data.get("title"),
        release_day=data.get("release_day"),
        release_time=data.get("release_time"),
        current_episodes=data.get("current_episodes", 0),
        total_episodes=data.get("total_episodes", 0),
        image=_decode_image(data.get("image")),
    )
    get_catalog_store().add_banner(banner, current_user.name)
    return success_response(data={"title": banner.title}, message="Banner added", status_code=201)


@banners_bp.route("/<path:title>", methods=["DELETE"])
@access_required("user")
def delete_banner(title):
    deleted = get_catalog_store().delete_banner(title, current_user.name)
    return success_response(data={"affected": deleted})


@banners_bp.route("", methods=["GET"])
@access_required("user")
def list_banners():
    store = get_catalog_store()
    if not has_page_args():
        banners = store.list_all_banners(current_user.name)
        return success_response(data=_serialize(banners, _include_image()))

    page_size, page_index = page_args()
    banners = store.list_paged(current_user.name, page_size, page_index)
    return page_response(_serialize(banners, _include_image()), page_index, page_size)


@banners_bp.route("/search", methods=["GET"])
@access_required("user")
def search_banners():
    page_size, page_index = page_args()
    banners = get_catalog_store().search_banners(request.args.get("query", ""), current_user.name, page_size, page_index)
    return page_response(_serialize(banners, _include_image()), page_index, page_size)


@banners_bp.route("/by-release-day", methods=["GET"])
@access_required("user")
def list_by_release_day():
    page_size, page_index = page_args()
    banners = get_catalog_store().list_sorted_by_release_day(current_user.name, page_size, page_index)
    return page_response(_serialize(banners, _include_image()), page_index, page_size)


UPDATERS = {
    "current-episodes": "update_current_episodes",
    "total-episodes": "update_total_episodes",
    "release-day": "update_release_day",
    "release-time": "update_release_time",
}


@banners_bp.route("/<path:title>/<field>", methods=["PUT"])
@access_required("user")
def update_banner(title, field):
    if field not in UPDATERS:
        return not_found_response("Banner field", field)
    data = json_body()
    if "value" not in data:
        raise ValidationException("Missing 'value'")

    store = get_catalog_store()
    updated = getattr(store, UPDATERS[field])(title, current_user.name, data["value"])
    return success_response(data={"affected": updated})


@banners_bp.route("/<path:title>/countdown", methods=["GET"])
@access_required("user")
def countdown(title):
    store = get_catalog_store()
    banner = store.get_banner(title, current_user.name)
    if banner is None:
        return not_found_response("Banner", title)

    try:
        remaining = time_until_release(banner.release_day, banner.release_time, store.clock())
    except ValueError as e:
        raise ValidationException(str(e))

    total_seconds = int(remaining.total_seconds())
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return success_response(
        data={
            "title": banner.title,
            "days": days,
            "hours": hours,
            "minutes": minutes,
            "seconds": seconds,
            "text": format_countdown(remaining),
        }
    )
