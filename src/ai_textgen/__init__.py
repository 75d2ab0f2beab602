"""
AI text generator package.

Provides:
- An asyncio job client that submits generation requests and polls them
- Prompt composition (content types, tones) and a caller-owned history
- A FastAPI proxy that relays job requests to the Replicate predictions API
"""
