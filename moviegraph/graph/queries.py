"""Cypher query templates for the movie graph tour."""

CREATE_ACTOR = """
CREATE (actor:Actor {name: $name})
RETURN actor
"""

MATCH_ACTOR_BY_NAME = """
MATCH (actor:Actor)
WHERE actor.name = $actor_name
RETURN actor
"""

CREATE_MOVIE_FOR_ACTOR = """
MATCH (actor:Actor)
WHERE actor.name = $actor_name
CREATE (movie:Movie {title: $movie_title})
CREATE (actor)-[:ACTED_IN]->(movie)
"""

# MERGE only creates the whole (relationship, movie) pattern when it is absent.
MERGE_MOVIE_FOR_ACTOR = """
MATCH (actor:Actor {name: $actor_name})
MERGE (actor)-[r:ACTED_IN]->(movie:Movie {title: $movie_title})
RETURN actor.name AS actor_name, type(r) AS relationship_type, movie.title AS movie_title
"""

SET_ACTOR_BIRTH_YEAR = """
MATCH (actor:Actor {name: $actor_name})
SET actor.DoB = $dob
RETURN actor.name AS name, actor.DoB AS date_of_birth
"""

MATCH_ALL_MOVIES = """
MATCH (movie:Movie)
RETURN movie
"""

MATCH_ALL_NODES = """
MATCH (n)
RETURN n
"""

COUNT_ALL_NODES = """
MATCH (n)
RETURN count(n) AS count
"""

DELETE_ALL_NODES = """
MATCH (n)
DETACH DELETE n
RETURN count(n) AS deleted
"""
