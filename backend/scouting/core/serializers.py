"""Response Shaping — pure mapping from ORM rows to camelCase response dicts.

Invariants:
    - No IO: callers load everything first (relationships included)
    - Dates of birth and club creation dates rendered DD-MM-YYYY
    - Timestamps rendered ISO-8601
    - imageUrl picks the first non-null of thumb_normal, thumb_profile, thumb,
      thumb_icon (clubs also fall back to logo)
"""

from datetime import date

from scouting.core.dates import calculate_age, format_date


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def primary_image_url(row, include_logo: bool = False) -> str | None:
    candidates = [
        row.thumb_normal_url, row.thumb_profile_url,
        row.thumb_url, row.thumb_icon_url,
    ]
    if include_logo:
        candidates.append(row.logo_url)
    return next((url for url in candidates if url), None)


def format_location(*parts: str | None) -> str | None:
    present = [p for p in parts if p]
    return ", ".join(present) if present else None


def _thumbs(row) -> dict:
    return {
        "thumbUrl": row.thumb_url,
        "thumbProfileUrl": row.thumb_profile_url,
        "thumbNormalUrl": row.thumb_normal_url,
        "thumbIconUrl": row.thumb_icon_url,
    }


# ─── Users ───────────────────────────────────────────────────────

def serialize_user(user) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "photoUrl": user.photo_url,
        "profileType": user.profile_type,
        "credits": user.credits,
        "isPro": user.is_pro,
        "createdAt": _iso(user.created_at),
    }


# ─── Clubs ───────────────────────────────────────────────────────

def serialize_club_summary(club) -> dict:
    return {
        "id": str(club.id),
        "name": club.name,
        "country": club.country,
        "description": club.description,
        "memberCount": club.member_count,
        "viewCount": club.view_count,
        "imageUrl": primary_image_url(club, include_logo=True),
        "profile": {"logoUrl": club.logo_url, **_thumbs(club)},
    }


def serialize_club_member(profile, today: date | None = None) -> dict:
    return {
        "id": str(profile.id),
        "name": f"{profile.first_name} {profile.last_name or ''}".strip(),
        "position": profile.primary_position,
        "location": format_location(profile.city, profile.state, profile.country),
        "age": calculate_age(profile.date_of_birth, today),
        "imageUrl": primary_image_url(profile),
        "profile": _thumbs(profile),
    }


def serialize_club_detail(club, members: list, today: date | None = None) -> dict:
    formatted_members = [serialize_club_member(m, today) for m in members]
    return {
        **serialize_club_summary(club),
        "clubId": club.club_id,
        "status": club.status,
        "createdAt": format_date(club.created_at),
        "members": formatted_members,
        "playerCount": len(formatted_members),
    }


# ─── Player profiles ─────────────────────────────────────────────

def serialize_player_profile(profile) -> dict:
    return {
        "id": str(profile.id),
        "userId": profile.user_id,
        "profileType": profile.profile_type,
        "firstName": profile.first_name,
        "lastName": profile.last_name,
        "dateOfBirth": format_date(profile.date_of_birth),
        "primaryPosition": profile.primary_position,
        "club": profile.club,
        "city": profile.city,
        "state": profile.state,
        "country": profile.country,
        "avatar": profile.avatar,
        **_thumbs(profile),
        "createdAt": _iso(profile.created_at),
        "updatedAt": _iso(profile.updated_at),
    }


# ─── Matches ─────────────────────────────────────────────────────

def serialize_match_summary(match) -> dict:
    return {
        "id": str(match.id),
        "title": match.title,
        "status": match.status,
        "createdAt": _iso(match.created_at),
    }


def serialize_match_result(result) -> dict | None:
    if result is None:
        return None
    return {
        "id": str(result.id),
        "matchId": str(result.match_id),
        "payload": result.payload,
        "itemCount": result.item_count,
        "submissionCount": result.submission_count,
        "createdAt": _iso(result.created_at),
        "updatedAt": _iso(result.updated_at),
    }


def serialize_match(match, include_result: bool = False) -> dict:
    data = {
        "id": str(match.id),
        "userId": match.user_id,
        "title": match.title,
        "videoUrl": match.video_url,
        "homeTeam": match.home_team,
        "awayTeam": match.away_team,
        "matchLevel": match.match_level,
        "focusHint": match.focus_hint,
        "status": match.status,
        "progress": match.progress,
        "createdAt": _iso(match.created_at),
        "updatedAt": _iso(match.updated_at),
    }
    if include_result:
        data["result"] = serialize_match_result(match.result)
    return data


def serialize_work_item(match) -> dict:
    """Minimal view handed to the analysis worker."""
    return {
        "id": str(match.id),
        "videoUrl": match.video_url,
        "matchLevel": match.match_level,
        "homeTeam": match.home_team,
        "awayTeam": match.away_team,
        "focusHint": match.focus_hint,
        "status": match.status,
    }


# ─── Profile visits ──────────────────────────────────────────────

def serialize_visit(visit) -> dict:
    visitor = visit.visitor
    return {
        "userId": visit.visitor_user_id,
        "name": visitor.name if visitor else None,
        "email": visitor.email if visitor else None,
        "phone": visitor.phone if visitor else None,
        "profileType": visit.visitor_profile_type,
        "visitedAt": _iso(visit.visited_at),
    }
