from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Record Store", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/record_store_stub") if os.path.exists("/record_store_stub") else Path(__file__).resolve().parents[2] / "record_store_stub"

KINDS = {"transactions", "assets", "liabilities", "goals", "recurring_expenses"}


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/records/{kind}")
def get_records(kind: str, user_id: str, limit: int | None = Query(default=None, gt=0)):
    if kind not in KINDS:
        raise HTTPException(status_code=404, detail="unknown record kind")
    file = DATA_DIR / f"records_{user_id}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="user not found")
    records = json.loads(file.read_text()).get(kind, [])
    if kind == "transactions":
        # Newest first, like the dashboard's storage query
        records = sorted(records, key=lambda r: r["created_at"], reverse=True)
        if limit is not None:
            records = records[:limit]
    return JSONResponse(content={kind: records})
