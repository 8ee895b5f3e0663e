from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Lab Management API", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/lab_stub") if os.path.exists("/lab_stub") else Path(__file__).resolve().parents[1] / "lab_stub"


class Credentials(BaseModel):
    email: str
    password: str


def load_users() -> list[dict]:
    return json.loads((DATA_DIR / "users.json").read_text())


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/api/users/login")
def login(credentials: Credentials):
    for user in load_users():
        if user["email"] == credentials.email and user["password"] == credentials.password:
            # Echoes the password like the real service does; the gateway must strip it
            return JSONResponse(content=user)
    raise HTTPException(status_code=400, detail="invalid credentials")

@app.get("/api/transactions")
def get_transactions(user_id: str):
    file = DATA_DIR / f"transactions_{user_id}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="user not found")
    return JSONResponse(content=json.loads(file.read_text()))
