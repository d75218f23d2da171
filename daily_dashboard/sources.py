"""Catalogue of the feeds shown on the dashboard."""

from __future__ import annotations

from typing import Dict, List

from .classify import INTERNATIONAL_RUGBY, enrich_review
from .models import FallbackTemplate, FeedSource

_TECHSPOT_TITLES = (
    "Latest GPU Benchmarks Show Performance Gains",
    "New AI Breakthrough in Machine Learning",
    "Cybersecurity Alert: Critical Vulnerability Found",
    "Gaming Performance Analysis: RTX vs Radeon",
    "Mobile Technology Advances in 2025",
    "Cloud Computing Trends for Enterprises",
    "Open Source Software Development Updates",
    "Hardware Review: Latest SSD Performance",
)

TECHSPOT = FeedSource(
    key="techspot",
    name="TechSpot",
    url="https://www.techspot.com/backend.xml",
    default_link="https://www.techspot.com",
    author="TechSpot",
    default_category="Technology",
    base_url="https://www.techspot.com",
    description_limit=200,
    fallback_hours=24,
    fallback=tuple(
        FallbackTemplate(
            title=title,
            description=(
                f"This is a sample article about {title.lower()}. "
                "Content would normally be loaded from TechSpot RSS feed."
            ),
            categories=("Technology", "Demo"),
        )
        for title in _TECHSPOT_TITLES
    ),
)

EUROGAMER = FeedSource(
    key="eurogamer",
    name="Eurogamer",
    url="https://www.eurogamer.net/feed",
    default_link="https://www.eurogamer.net/",
    author="Eurogamer Editorial",
    default_category="Gaming",
    base_url="https://www.eurogamer.net",
    description_limit=250,
    fallback_hours=168,
    fallback=tuple(
        FallbackTemplate(title=title, description=description, categories=("Gaming", "Reviews", "News"))
        for title, description in (
            ("Game Industry Analysis: 2025 Trends", "Deep dive into the most important gaming trends shaping the industry this year."),
            ("Indie Game Spotlight: Rising Stars", "Featuring the most promising independent games from emerging developers."),
            ("Gaming Hardware Review Roundup", "Comprehensive reviews of the latest gaming hardware and peripherals."),
            ("Retro Gaming Revival Continues", "Classic games continue to find new audiences on modern platforms."),
            ("Mobile Gaming Market Analysis", "The mobile gaming sector shows continued growth and innovation."),
            ("Virtual Reality Gaming Evolution", "VR gaming reaches new heights with improved hardware and software."),
            ("Gaming Community Highlights", "Celebrating the best contributions from the global gaming community."),
            ("Game Development Documentary", "Behind-the-scenes look at modern game development processes."),
        )
    ),
)

GAME_DEVELOPER = FeedSource(
    key="gamedeveloper",
    name="Game Developer",
    url="https://www.gamedeveloper.com/rss.xml",
    default_link="https://www.gamedeveloper.com/",
    author="Game Developer Staff",
    default_category="Game Development",
    base_url="https://www.gamedeveloper.com",
    description_limit=250,
    fallback_hours=168,
    fallback=tuple(
        FallbackTemplate(
            title=title,
            description=description,
            categories=("Game Development", "Industry", "Business"),
        )
        for title, description in (
            ("Best Practices for Game Monetization", "Ethical and effective strategies for game monetization in 2025."),
            ("Game Engine Comparison Guide", "Comprehensive analysis of popular game engines and their strengths."),
            ("Accessibility in Game Design", "Making games more inclusive through thoughtful design practices."),
            ("Game Development Team Management", "Tips for leading successful game development teams."),
            ("Publishing Strategies for Indie Developers", "How independent developers can successfully publish their games."),
            ("Game Analytics and Player Metrics", "Understanding and utilizing player data for game improvement."),
            ("Cross-Platform Development Challenges", "Technical considerations for multi-platform game development."),
            ("Game Design Psychology Insights", "The psychology behind addictive and engaging game mechanics."),
        )
    ),
)

IGN_REVIEWS = FeedSource(
    key="ign",
    name="IGN",
    url="https://feeds.ign.com/ign/reviews",
    default_link="https://www.ign.com/reviews/games",
    author="IGN",
    default_category="Game Review",
    base_url="https://www.ign.com",
    description_limit=200,
    fallback_hours=168,
    fallback=tuple(
        FallbackTemplate(
            title=title,
            description=(
                f"IGN's review of {title}. This is sample content that would "
                "normally be loaded from IGN's RSS feed."
            ),
            categories=("Game Review", "Gaming"),
            extras={"score": score, "platform": platform, "genre": genre},
        )
        for title, score, platform, genre in (
            ("The Legend of Zelda: Tears of the Kingdom", 9.5, "Nintendo Switch", "Adventure"),
            ("Hogwarts Legacy", 8.5, "PC, PS5, Xbox Series X/S", "RPG"),
            ("Resident Evil 4 Remake", 9.0, "PC, PS5, Xbox Series X/S", "Horror"),
            ("Spider-Man 2", 8.8, "PS5", "Action"),
            ("Alan Wake 2", 8.9, "PC, PS5, Xbox Series X/S", "Horror"),
            ("Baldur's Gate 3", 9.8, "PC, PS5", "RPG"),
            ("Starfield", 7.5, "PC, Xbox Series X/S", "RPG"),
            ("Cyberpunk 2077: Phantom Liberty", 8.7, "PC, PS5, Xbox Series X/S", "Action"),
        )
    ),
    enrich=enrich_review,
)

RUGBYRAMA = FeedSource(
    key="rugbyrama",
    name="Rugbyrama",
    url="https://www.rugbyrama.fr/rss.xml",
    default_link="https://www.rugbyrama.fr/",
    author="Rugbyrama",
    default_category="Rugby",
    base_url="https://www.rugbyrama.fr",
    description_limit=200,
    fallback_hours=72,
    fallback=tuple(
        FallbackTemplate(title=title, description=description, categories=(category,))
        for title, description, category in (
            ("Rugby Championship : L'Afrique du Sud domine l'Australie", "Les Springboks s'imposent face aux Wallabies dans un match spectaculaire du Rugby Championship.", "Rugby Championship"),
            ("Six Nations 2025 : Le XV de France prépare sa campagne", "L'équipe de France se prépare pour le prochain Tournoi des Six Nations avec de nouveaux visages.", "XV de France"),
            ("All Blacks : Nouvelle sélection pour les test-matchs", "La Nouvelle-Zélande dévoile sa liste de joueurs pour les prochains matchs internationaux.", "New Zealand"),
            ("Coupe du Monde de Rugby : Calendrier des qualifications", "Les phases de qualification pour la prochaine Coupe du Monde s'intensifient.", "Coupe du Monde"),
            ("Angleterre vs Irlande : Avant-match du choc", "Preview du match crucial entre l'Angleterre et l'Irlande en test-match international.", "International"),
            ("Springboks : Retour de blessure pour plusieurs joueurs", "L'Afrique du Sud récupère des joueurs clés avant les prochaines échéances internationales.", "South Africa"),
            ("XV de France Féminin : Victoire historique", "Les Bleues s'imposent dans un match international mémorable.", "XV de France"),
            ("Rugby Championship : Classement après la 2e journée", "Point sur le classement du Rugby Championship après les derniers résultats.", "Rugby Championship"),
        )
    ),
    rules=INTERNATIONAL_RUGBY,
)

SOURCES: Dict[str, FeedSource] = {
    source.key: source
    for source in (TECHSPOT, EUROGAMER, GAME_DEVELOPER, IGN_REVIEWS, RUGBYRAMA)
}

SECTIONS: Dict[str, List[str]] = {
    "news": ["techspot"],
    "gamedev": ["eurogamer", "gamedeveloper"],
    "reviews": ["ign"],
    "rugby": ["rugbyrama"],
}


def get_source(key: str) -> FeedSource:
    try:
        return SOURCES[key]
    except KeyError:
        raise ValueError(f"Unknown feed source: {key}") from None
