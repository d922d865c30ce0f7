"""
InfraGen - Terraform project generation service.

Turns a free-text infrastructure description into a complete Terraform
project (files, variables, diagnostics, corrections) by calling an
OpenAI-compatible AI gateway and normalizing whatever it sends back.

Run with: uvicorn infragen.main:app --reload
"""

__version__ = "0.1.0"
