from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import bgg2md

logger = logging.getLogger('bgg2md')

app = FastAPI(title="GeekText <-> Markdown Converter API")

# Enable CORS for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _read_content(text, file):
    if not text and not file:
        logger.warning("Convert request without text or file")
        raise HTTPException(status_code=400, detail="No content provided")

    if text:
        content = text
    else:
        content = (await file.read()).decode("utf-8")

    try:
        bgg2md.check_input_size(content)
    except bgg2md.SecurityError as e:
        logger.warning("Rejected request: %s", e)
        raise HTTPException(status_code=413, detail=str(e))
    return content


@app.post("/convert", response_class=PlainTextResponse)
@app.post("/api/convert", response_class=PlainTextResponse)  # Support both paths
async def convert_text(
    text: str = Form(None),
    file: UploadFile = File(None),
    direction: str = Form(bgg2md.BGG_TO_MD),
):
    content = await _read_content(text, file)
    result = bgg2md.convert_document(content, direction)
    return PlainTextResponse(result.text)


@app.post("/api/preview", response_class=HTMLResponse)
async def preview(
    text: str = Form(None),
    file: UploadFile = File(None),
):
    content = await _read_content(text, file)
    return HTMLResponse(bgg2md.render_html(bgg2md.bgg_to_markdown(content)))


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
