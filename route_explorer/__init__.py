"""
Route explorer - browse flight routes from a route listing API.

Layers:
    schemas      typed records and filter snapshots
    ports        abstract listing and schedule services
    adapters     httpx clients for those services
    services     query codec, aggregation, filtering, pagination
    application  query engines and in-flight session tracking
    dashboard    Streamlit views
"""
