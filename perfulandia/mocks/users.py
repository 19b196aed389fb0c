"""
Users service mock. Answers GET /users/{id} for the ids in MOCK_USER_IDS.

    uvicorn perfulandia.mocks.users:app --port 8080
"""

from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException

from perfulandia import config

USERS = {
    int(uid): {"id": int(uid), "name": f"customer-{uid.strip()}"}
    for uid in config.MOCK_USER_IDS.split(",")
    if uid.strip()
}

LAST = {
    "seen_at": None,
    "user_id": None,
    "found": None,
}

app = FastAPI(title="Users Mock")


@app.get("/users/{user_id}")
def get_user(user_id: int):
    user = USERS.get(user_id)

    LAST.update({
        "seen_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "user_id": user_id,
        "found": user is not None,
    })

    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.get("/last")
def last():
    return LAST


@app.get("/health")
def health():
    return {"status": "ok", "service": "users-mock"}
