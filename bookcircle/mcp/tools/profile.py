from bookcircle.client.api import ApiError, BookCircleClient


async def user_stats(client: BookCircleClient, user_id: int | None = None) -> dict:
    """Review statistics for a user, defaulting to the logged-in one."""
    target = user_id if user_id is not None else client.user_id
    if target is None:
        return {"error": True, "status": 400, "detail": "No user_id given and not logged in"}
    try:
        return await client.user_stats(target)
    except ApiError as e:
        return e.as_dict()
