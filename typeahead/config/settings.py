import os
from typing import List, Optional, Tuple
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings and configuration"""
    
    def __init__(self):
        # Search backend: "elasticsearch" or "wpcom"
        self.search_backend = os.getenv("SEARCH_BACKEND", "elasticsearch")
        self.search_timeout = float(os.getenv("SEARCH_TIMEOUT", "10"))
        
        # Elasticsearch backend
        self.elasticsearch_url = os.getenv("ELASTICSEARCH_URL", "http://localhost:9200")
        self.elasticsearch_username = os.getenv("ELASTICSEARCH_USERNAME")
        self.elasticsearch_password = os.getenv("ELASTICSEARCH_PASSWORD")
        self.search_index = os.getenv("SEARCH_INDEX", "posts")
        
        # WordPress.com REST backend
        self.wpcom_api_url = os.getenv("WPCOM_API_URL", "https://public-api.wordpress.com/rest/v1")
        self.wpcom_site_id = os.getenv("WPCOM_SITE_ID", "1821682")
        
        # API settings
        self.api_title = "Search-as-you-type API"
        self.api_description = "Debounced autocomplete over a full-text search endpoint, driven over a websocket"
        self.api_version = "1.0.0"
        
        # Search settings
        self.search_size = 20
        self.post_types = _split_list(os.getenv("SEARCH_POST_TYPES", "post"))
        self.match_fields = ["title^5", "content", "author", "tag", "category", "tag.name^3"]
        self.result_fields = ["blog_id", "post_id", "url", "title", "post_type", "slug"]
        
        # Autocomplete widget settings
        self.min_keyword_length = int(os.getenv("MIN_KEYWORD_LENGTH", "2"))
        self.debounce_ms = int(os.getenv("DEBOUNCE_MS", "300"))
        
        self.debug = _flag(os.getenv("DEBUG", "false"))
    
    @property
    def elasticsearch_auth(self) -> Optional[Tuple[str, str]]:
        """Get Elasticsearch authentication tuple"""
        if self.elasticsearch_username and self.elasticsearch_password:
            return (self.elasticsearch_username, self.elasticsearch_password)
        return None


# Global settings instance
settings = Settings()
