"""
SERVICES PACKAGE
=================

Business logic lives here. The API layer (app.main) calls these services;
they don't handle HTTP, only classification, response rendering and the demos.

MODULES:
    intent_classifier  - ordered keyword rules -> Intent
    response_generator - Intent -> reply text + context, from the Knowledge Base
    chat_service       - validate, classify, generate, attach metadata
    cache_kernel       - TTL cache vs. backing store
    index_kernel       - inverted index vs. sequential scan over a log corpus
    batch_kernel       - grouped vs. per-item dispatch
    delivery_kernel    - push vs. poll event delivery
    demo_service       - dispatch on the demo `type`
"""
