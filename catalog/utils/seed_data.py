from typing import List
from ..schemas.catalog_schemas import MovieRecord

SAMPLE_MOVIES: List[MovieRecord] = [
    MovieRecord(
        id=1,
        title="The Shawshank Redemption",
        description="Two imprisoned men bond over a number of years, finding "
                    "solace and eventual redemption through acts of common decency.",
        genres=["Drama"],
        release_year=1994,
        rating=9.3,
        duration_minutes=142,
        director="Frank Darabont",
        cast=["Tim Robbins", "Morgan Freeman", "Bob Gunton"],
        image_url="https://image.tmdb.org/t/p/w500/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
        video_url="https://www.youtube.com/watch?v=6hB3S9bIaco",
    ),
    MovieRecord(
        id=2,
        title="The Godfather",
        description="The aging patriarch of an organized crime dynasty "
                    "transfers control of his empire to his reluctant son.",
        genres=["Crime", "Drama"],
        release_year=1972,
        rating=9.2,
        duration_minutes=175,
        director="Francis Ford Coppola",
        cast=["Marlon Brando", "Al Pacino", "James Caan"],
        image_url="https://image.tmdb.org/t/p/w500/3bhkrj58Vtu7enYsRolD1fZdja1.jpg",
        video_url="https://www.youtube.com/watch?v=sY1S34973zA",
    ),
    MovieRecord(
        id=3,
        title="The Dark Knight",
        description="Batman faces the Joker, a criminal mastermind who "
                    "plunges Gotham City into anarchy.",
        genres=["Action", "Crime", "Drama"],
        release_year=2008,
        rating=9.0,
        duration_minutes=152,
        director="Christopher Nolan",
        cast=["Christian Bale", "Heath Ledger", "Aaron Eckhart"],
        image_url="https://image.tmdb.org/t/p/w500/qJ2tW6WMUDux911r6m7haRef0WH.jpg",
        video_url="https://www.youtube.com/watch?v=EXeTwQWrcwY",
    ),
    MovieRecord(
        id=4,
        title="Batman Begins",
        description="After training with his mentor, Bruce Wayne begins his "
                    "fight to free crime-ridden Gotham City from corruption.",
        genres=["Action", "Crime"],
        release_year=2005,
        rating=8.2,
        duration_minutes=140,
        director="Christopher Nolan",
        cast=["Christian Bale", "Michael Caine", "Liam Neeson"],
        image_url="https://image.tmdb.org/t/p/w500/4MpN4kIEqUjW8OPtOQJXlTdHiJV.jpg",
        video_url="https://www.youtube.com/watch?v=neY2xVmOfUM",
    ),
    MovieRecord(
        id=5,
        title="Pulp Fiction",
        description="The lives of two mob hitmen, a boxer, a gangster and his "
                    "wife intertwine in four tales of violence and redemption.",
        genres=["Crime", "Drama"],
        release_year=1994,
        rating=8.9,
        duration_minutes=154,
        director="Quentin Tarantino",
        cast=["John Travolta", "Uma Thurman", "Samuel L. Jackson"],
        image_url="https://image.tmdb.org/t/p/w500/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg",
        video_url="https://www.youtube.com/watch?v=s7EdQ4FqbhY",
    ),
    MovieRecord(
        id=6,
        title="Inception",
        description="A thief who steals corporate secrets through dream-sharing "
                    "technology is given the task of planting an idea.",
        genres=["Action", "Sci-Fi", "Thriller"],
        release_year=2010,
        rating=8.8,
        duration_minutes=148,
        director="Christopher Nolan",
        cast=["Leonardo DiCaprio", "Joseph Gordon-Levitt", "Elliot Page"],
        image_url="https://image.tmdb.org/t/p/w500/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
        video_url="https://www.youtube.com/watch?v=YoHD9XEInc0",
    ),
    MovieRecord(
        id=7,
        title="Spirited Away",
        description="A girl wanders into a world ruled by gods, witches and "
                    "spirits, where humans are changed into beasts.",
        genres=["Animation", "Family", "Fantasy"],
        release_year=2001,
        rating=8.6,
        duration_minutes=125,
        director="Hayao Miyazaki",
        cast=["Rumi Hiiragi", "Miyu Irino", "Mari Natsuki"],
        image_url="https://image.tmdb.org/t/p/w500/39wmItIWsg5sZMyRUHLkWBcuVCM.jpg",
        video_url="https://www.youtube.com/watch?v=ByXuk9QqQkk",
    ),
    MovieRecord(
        id=8,
        title="Alien",
        description="The crew of a commercial spacecraft encounters a deadly "
                    "lifeform after investigating an unknown transmission.",
        genres=["Horror", "Sci-Fi"],
        release_year=1979,
        rating=8.5,
        duration_minutes=117,
        director="Ridley Scott",
        cast=["Sigourney Weaver", "Tom Skerritt", "John Hurt"],
        image_url="https://image.tmdb.org/t/p/w500/vfrQk5IPloGg1v9Rzbh2Eg3VGyM.jpg",
        video_url="https://www.youtube.com/watch?v=LjLamj-b0I8",
    ),
]
