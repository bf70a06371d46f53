from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

movies = Table(
    'movies',
    metadata,
    Column('id', Integer, primary_key=True),
    Column('title', String(255), nullable=False),
    Column('description', Text),
    Column('release_year', Integer),
    Column('rating', Float),
    Column('duration_minutes', Integer),
    Column('director', String(255)),
    Column('image_url', Text),
    Column('video_url', Text),
)

# genres and cast live in child tables so that membership and substring
# predicates stay portable between PostgreSQL and SQLite
movie_genres = Table(
    'movie_genres',
    metadata,
    Column('movie_id', Integer, ForeignKey('movies.id', ondelete='CASCADE'),
           primary_key=True),
    Column('genre', String(100), primary_key=True),
)

movie_cast = Table(
    'movie_cast',
    metadata,
    Column('movie_id', Integer, ForeignKey('movies.id', ondelete='CASCADE'),
           primary_key=True),
    Column('position', Integer, primary_key=True),
    Column('actor', String(255), nullable=False),
)
