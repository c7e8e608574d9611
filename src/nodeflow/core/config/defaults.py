# src/nodeflow/core/config/defaults.py
"""
Configuração embutida do NodeFlow.

Estes valores são a base de toda resolução de configuração e refletem o
comportamento padrão do editor: Gemini como provedor primário (credencial
de ambiente) e OpenAI GPT-4 como provedor secundário (credencial fornecida
pelo usuário a cada run).
"""

from typing import Any, Dict

PRIMARY = "primary"
SECONDARY = "secondary"

DEFAULT_CONFIG: Dict[str, Any] = {
    "providers": {
        PRIMARY: {
            "label": "Gemini",
            "model": "gemini-2.5-flash",
            "image_model": "imagen-3.0-generate-002",
            "api_key_env": "API_KEY",
        },
        SECONDARY: {
            "label": "OpenAI",
            "model": "gpt-4",
            "base_url": "https://api.openai.com/v1",
            "timeout": None,
        },
    },
    # nome de provedor escolhido no nó prompt -> papel do provedor
    "prompt": {
        "aliases": {
            "gemini-2.5-flash": PRIMARY,
            "gpt-4": SECONDARY,
        },
    },
    "http": {
        "timeout": None,
    },
    "log": {
        "preview_chars": 100,
    },
    "output": {
        "directory": None,
        "pdf_engine": "reportlab",
    },
}
