"""
FastAPI web server — build save files from netlist descriptions.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from spintronics.circuit import LevelCapacityError
from spintronics.netlist import NetlistError, build_circuit

log = logging.getLogger(__name__)

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Spintronics circuit builder")


# ── Models ─────────────────────────────────────────────────────────

class PartSpec(BaseModel):
    id: str
    type: str
    value: int | None = None


class BuildRequest(BaseModel):
    parts: list[PartSpec]
    chains: list[list[str]] = Field(default_factory=list)
    arrange: bool = False


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/build")
def build(req: BuildRequest):
    """Build a circuit from the request and return its save document."""
    netlist = {
        "parts": [p.model_dump(exclude_none=True) for p in req.parts],
        "chains": req.chains,
    }
    try:
        circuit = build_circuit(netlist)
    except NetlistError as exc:
        raise HTTPException(422, {"errors": exc.errors})
    except LevelCapacityError as exc:
        raise HTTPException(409, str(exc))

    return circuit.to_dict(arrange_chains=req.arrange)


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    log.info("Serving on http://%s:%d", host, port)
    uvicorn.run("spintronics.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
