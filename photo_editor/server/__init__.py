"""
Relay server: FastAPI adapter between the editor and the Gemini API.
"""
