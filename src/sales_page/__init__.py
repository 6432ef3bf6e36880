# Sales Page Builder
"""
Compose sales pages from a fixed catalogue of sections and publish them:
- sections: variant catalogue, typed content records, defaults/fallbacks
- store: in-memory ordered section collection for one page
- template_engine: Jinja2 renderer shared by preview and public view
- editor: per-section edit forms emitting whole-content updates
- publisher: Supabase page repository and image storage
"""
