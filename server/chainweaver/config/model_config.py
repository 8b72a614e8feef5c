"""Model registry and per-model pricing."""

MODEL_REGISTRY = {
    "openai": {
        "models": [
            "gpt-4o-mini",
            "gpt-4.1",
            "o3",
            "gpt-4o",
            "gpt-4o-2024-05-13",
            "o4-mini",
            "gpt-4.1-mini",
            "gpt-4.1-nano",
            # legacy
            "gpt-4-turbo",
            "gpt-4-turbo-preview",
            "gpt-3.5-turbo",
            "gpt-3.5-turbo-16k"
        ],
        "fallback_pricing_model": "gpt-4o-mini"
    },
    "anthropic": {
        "models": [
            "claude-3-5-sonnet-20241022",
            "claude-3-5-haiku-20241022",
            "claude-3-opus-20240229",
            "claude-3-sonnet-20240229",
            "claude-3-haiku-20240307"
        ],
        "fallback_pricing_model": "claude-3-haiku-20240307"
    },
    "google": {
        "models": [
            "gemini-2.0-flash",
            "gemini-1.5-pro",
            "gemini-1.5-flash"
        ],
        "fallback_pricing_model": "gemini-2.0-flash"
    },
    "deepseek": {
        "models": [
            "deepseek-chat",
            "deepseek-reasoner"
        ],
        "fallback_pricing_model": "deepseek-chat"
    }
}

# USD per 1K tokens
MODEL_PRICING = {
    "openai": {
        "gpt-4.1": {"input": 0.002, "output": 0.008},
        "o3": {"input": 0.002, "output": 0.008},
        "gpt-4o": {"input": 0.005, "output": 0.020},
        "gpt-4o-2024-05-13": {"input": 0.005, "output": 0.020},
        "o4-mini": {"input": 0.0011, "output": 0.0044},
        "gpt-4.1-mini": {"input": 0.0004, "output": 0.0016},
        "gpt-4o-mini": {"input": 0.0006, "output": 0.0024},
        "gpt-4.1-nano": {"input": 0.0001, "output": 0.0004},
        "gpt-4-turbo": {"input": 0.01, "output": 0.03},
        "gpt-4-turbo-preview": {"input": 0.01, "output": 0.03},
        "gpt-3.5-turbo": {"input": 0.0015, "output": 0.002},
        "gpt-3.5-turbo-16k": {"input": 0.003, "output": 0.004}
    },
    "anthropic": {
        "claude-3-5-sonnet-20241022": {"input": 0.003, "output": 0.015},
        "claude-3-5-haiku-20241022": {"input": 0.00025, "output": 0.00125},
        "claude-3-opus-20240229": {"input": 0.015, "output": 0.075},
        "claude-3-sonnet-20240229": {"input": 0.003, "output": 0.015},
        "claude-3-haiku-20240307": {"input": 0.00025, "output": 0.00125}
    },
    "google": {
        "gemini-2.0-flash": {"input": 0.0001, "output": 0.0004},
        "gemini-1.5-pro": {"input": 0.00125, "output": 0.005},
        "gemini-1.5-flash": {"input": 0.000075, "output": 0.0003}
    },
    "deepseek": {
        "deepseek-chat": {"input": 0.00027, "output": 0.0011},
        "deepseek-reasoner": {"input": 0.00055, "output": 0.00219}
    }
}
