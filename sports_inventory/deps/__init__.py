# FastAPI dependencies shared by the API routers.
