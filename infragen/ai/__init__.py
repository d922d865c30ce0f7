"""
AI Module - everything that talks to, or interprets, the AI gateway.

Module Structure:
================
- prompts/      system + user prompt for Terraform generation
- router/       caller-facing model id -> gateway model id
- providers/    HTTP client for the OpenAI-compatible gateway
- extraction/   find the JSON project inside a gateway response
- schemas/      pydantic models and the forced tool schema
- monitoring/   structured logging of gateway calls
- errors.py     typed failures with their HTTP status
"""
