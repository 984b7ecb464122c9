"""
Integration tests for Document Tagger.

Test components together:
- API endpoints (FastAPI TestClient, completion endpoint mocked with httpx.MockTransport)
"""
