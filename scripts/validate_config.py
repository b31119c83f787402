#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from companion_app.config.loader import ConfigLoader
from companion_app.config.validation import ConfigValidator


def main():
    """Validate the merged configuration and report credential status."""
    print("🔍 Validating learning companion configuration...")

    loader = ConfigLoader.create()
    config = loader.merge_config()
    errors = ConfigValidator.validate(config)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    print("✅ Configuration is valid")

    generation = config["generation"]
    search = config["search"]
    print(f"\n🤖 Model: {generation['model']} ({generation['plan_days']}-day plans)")
    print(f"   Gemini API key: {'set' if generation.get('api_key') else 'missing'}")
    search_ready = search.get("api_key") and search.get("engine_id")
    print(f"🔎 Resource search: {'configured' if search_ready else 'not configured (model grounding used)'}")
    print(f"💾 Storage: {config['storage']['db_path']} [{config['storage']['storage_key']}]")
    sys.exit(0)


if __name__ == "__main__":
    main()
