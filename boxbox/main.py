from fastapi import FastAPI
from boxbox.api.routes import health, schedule, predictions, results, standings

app = FastAPI(title="BoxBox Prediction League API", version="0.1.0")

# Routers
app.include_router(health.router, tags=["system"])
app.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
app.include_router(predictions.router, prefix="/predictions", tags=["predictions"])
app.include_router(results.router, prefix="/results", tags=["results"])
app.include_router(standings.router, prefix="/standings", tags=["standings"])

@app.get("/", include_in_schema=False)
def root():
    return {"message": "BoxBox Prediction League API - see /docs"}
