"""
FastAPI service exposing the bookstore query run over HTTP.

Endpoints:
- ``GET  /health``   liveness and version
- ``GET  /steps``    the query sequence, in execution order
- ``POST /run``      run the full sequence and return every step result
- ``POST /seed``     reload the collection with the seed dataset
- ``GET  /indexes``  list the indexes currently on the collection
"""

from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError

import runner
from cluster_manager import connect_to_cluster, get_collection
from config import COLLECTION_NAME, DATABASE_NAME, MONGO_URI
from indexes import get_collection_indexes
from logger import logger
from seed import seed_books

VERSION = "1.0.0"

app = FastAPI(title="Bookstore Queries", version=VERSION)


# ---------------------- REQUEST / RESPONSE MODELS ----------------------


class CollectionRequest(BaseModel):
    mongo_uri: str = MONGO_URI
    database_name: str = DATABASE_NAME
    collection_name: str = COLLECTION_NAME


class SeedRequest(CollectionRequest):
    drop: bool = True
    books: Optional[List[dict]] = None


class StepResult(BaseModel):
    step: int
    label: str
    result: Any = None


class RunResponse(BaseModel):
    database_name: str
    collection_name: str
    step_count: int
    steps: List[StepResult]


# ---------------------- ENDPOINTS ----------------------


@app.get("/health")
def health():
    return {"status": "ok", "version": VERSION}


@app.get("/steps")
def list_steps():
    return [
        {"step": number, "label": step.label}
        for number, step in enumerate(runner.build_steps(), start=1)
    ]


@app.post("/run", response_model=RunResponse)
def run_queries(req: CollectionRequest):
    try:
        results = runner.run(
            req.mongo_uri, req.database_name, req.collection_name, echo=False
        )
    except ConnectionError as e:
        logger.error("run error: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except PyMongoError as e:
        logger.error("run error: %s", e)
        raise HTTPException(status_code=500, detail=f"Query execution error: {e}")

    return RunResponse(
        database_name=req.database_name,
        collection_name=req.collection_name,
        step_count=len(results),
        steps=[StepResult(**r) for r in results],
    )


@app.post("/seed")
def seed(req: SeedRequest):
    try:
        client = connect_to_cluster(req.mongo_uri)
    except ConnectionError as e:
        logger.error("seed error: %s", e)
        raise HTTPException(status_code=503, detail=str(e))

    try:
        collection = get_collection(client, req.database_name, req.collection_name)
        if req.books is None:
            inserted = seed_books(collection, drop=req.drop)
        else:
            inserted = seed_books(collection, req.books, drop=req.drop)
    except ValidationError as e:
        logger.warning("seed rejected: %s", e)
        raise HTTPException(status_code=400, detail=f"Invalid book data: {e}")
    except PyMongoError as e:
        logger.error("seed error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        client.close()

    return {"inserted": inserted}


@app.get("/indexes")
def list_indexes(
    mongo_uri: str = MONGO_URI,
    database_name: str = DATABASE_NAME,
    collection_name: str = COLLECTION_NAME,
):
    try:
        client = connect_to_cluster(mongo_uri)
    except ConnectionError as e:
        logger.error("indexes error: %s", e)
        raise HTTPException(status_code=503, detail=str(e))

    try:
        collection = get_collection(client, database_name, collection_name)
        return get_collection_indexes(collection)
    except PyMongoError as e:
        logger.error("indexes error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        client.close()
