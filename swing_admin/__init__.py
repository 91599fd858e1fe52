"""
My Swing admin dashboard: FastAPI app serving aggregate metrics, the in-app
message summary and the image upload relay.
"""
