"""Example usage of the discodiff comparison engine."""

import json
from discodiff import DiscoDiffEngine, EngineConfig, DiffOptions, parse_document, render_diff

# Baseline snapshot of a storage API description
old_doc = {
    "id": "storage:v1",
    "name": "storage",
    "revision": "20161109",
    "title": "Cloud Storage JSON API",
    "rootUrl": "https://www.googleapis.com/",
    "servicePath": "storage/v1/",
    "basePath": "/storage/v1/",
    "schemas": {
        "Bucket": {"id": "Bucket", "type": "object", "description": "A bucket."},
        "VariantExample": {"id": "VariantExample", "type": "object"},
    },
    "resources": {
        "buckets": {
            "methods": {
                "get": {
                    "id": "storage.buckets.get",
                    "path": "b/{bucket}",
                    "httpMethod": "GET",
                    "description": "Returns metadata for the specified bucket.",
                },
                "list": {
                    "id": "storage.buckets.list",
                    "path": "b",
                    "httpMethod": "GET",
                },
            }
        }
    }
}

# Newer snapshot of the same API
new_doc = {
    "id": "storage:v1",
    "name": "storage",
    "revision": "20191101",
    "title": "Cloud Storage JSON API",
    "rootUrl": "https://storage.googleapis.com/",
    "servicePath": "storage/v1/",
    "basePath": "/storage/v1/",
    "schemas": {
        "Bucket": {"id": "Bucket", "type": "object", "description": "A bucket resource."},
        "Shovel": {"id": "Shovel", "type": "object"},
    },
    "resources": {
        "buckets": {
            "methods": {
                "get": {
                    "id": "storage.buckets.get",
                    "path": "b/{bucket}",
                    "httpMethod": "GET",
                    "description": "Returns metadata for the specified bucket.",
                    "supportsMediaDownload": True,
                },
                "list": {
                    "id": "storage.buckets.list",
                    "path": "b",
                    "httpMethod": "GET",
                },
            }
        },
        "objects": {
            "methods": {
                "insert": {
                    "id": "storage.objects.insert",
                    "path": "b/{bucket}/o",
                    "httpMethod": "POST",
                }
            }
        }
    }
}


def main():
    old = parse_document(old_doc)
    new = parse_document(new_doc)

    # Full comparison
    engine = DiscoDiffEngine()
    entries = engine.compare(old, new)

    print("=" * 60)
    print("Full diff")
    print("=" * 60)
    print(render_diff(entries))

    # Same documents, ignoring descriptions and revision bumps
    quiet = EngineConfig(options=DiffOptions.ALL.without("descriptions", "versioning"))
    entries = DiscoDiffEngine(quiet).compare(old, new)

    print("=" * 60)
    print("Without descriptions or versioning")
    print("=" * 60)
    print(render_diff(entries))

    print("JSON form:")
    print(json.dumps([e.to_dict() for e in entries], indent=2))


if __name__ == "__main__":
    main()
