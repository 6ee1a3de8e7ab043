# quizblog/app.py
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from .agents.quiz import QuizQuestion, generate_question
from .config import get_settings
from .registry import get_client
from .utils.logger import setup_logger

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(get_settings().log_level)
    log.info("Server started.")
    yield
    log.info("Server shutting down.")


app = FastAPI(title="quizblog", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class QuestionReq(BaseModel):
    paragraph: str


@app.post("/api/questions", response_model=QuizQuestion)
async def questions(req: QuestionReq, client=Depends(get_client)):
    try:
        return await generate_question(client, req.paragraph, max_new_tokens=get_settings().max_new_tokens)
    except Exception as e:
        log.exception("Question generation failed")
        raise HTTPException(status_code=502, detail=f"Question generation failed: {str(e)}")


@app.api_route("/api/questions", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def questions_not_allowed(request: Request):
    return PlainTextResponse(
        f"Method {request.method} Not Allowed",
        status_code=405,
        headers={"Allow": "POST"},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "model": get_settings().model}


def run():
    import uvicorn
    uvicorn.run("quizblog.app:app", host="0.0.0.0", port=8000)
