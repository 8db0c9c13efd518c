import json
import os

import click
from flask import current_app

from trivia import db
from trivia.models import Question, User

QUESTION_FIELDS = ('questionText', 'correctAnswer', 'incorrectAnswers', 'category', 'imageRef')


def load_questions_from_json(directory):
    """Load every .json file in ``directory`` into the question bank.

    Each file holds a list of question objects. Idempotent: a question whose
    category and text already exist is skipped. Returns the number added.
    """
    if not os.path.isdir(directory):
        raise click.ClickException(f'Data directory not found: {directory}')

    added = 0
    seen = {(q.category, q.question_text) for q in Question.query.all()}
    for filename in sorted(os.listdir(directory)):
        if not filename.endswith('.json'):
            continue
        file_path = os.path.join(directory, filename)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            current_app.logger.warning(f"[import-skip] file={filename} error={e}")
            continue

        if not isinstance(entries, list):
            current_app.logger.warning(f"[import-skip] file={filename} reason=not-a-list")
            continue

        for entry in entries:
            if not isinstance(entry, dict) or any(not entry.get(field) for field in QUESTION_FIELDS):
                current_app.logger.warning(f"[import-skip] file={filename} reason=missing-fields")
                continue
            if not isinstance(entry['incorrectAnswers'], list) or len(entry['incorrectAnswers']) != 3:
                current_app.logger.warning(f"[import-skip] file={filename} reason=distractor-count")
                continue
            key = (entry['category'], entry['questionText'])
            if key in seen:
                continue
            seen.add(key)
            db.session.add(Question(
                question_text=entry['questionText'],
                correct_answer=entry['correctAnswer'],
                incorrect_answers=list(entry['incorrectAnswers']),
                category=entry['category'],
                image_ref=entry['imageRef'],
                source_ref=entry.get('sourceRef'),
            ))
            added += 1

    db.session.commit()
    current_app.logger.info(f"[import] directory={directory} added={added}")
    return added


def register_commands(flask_app):

    @flask_app.cli.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        db.drop_all()
        db.create_all()

        # Seed accounts
        accounts = [('admin', 'admin'), ('player1', 'user'), ('player2', 'user')]
        for username, role in accounts:
            user = User(username=username, role=role)
            user.set_password('password')
            db.session.add(user)

        db.session.commit()
        click.echo('Database has been reset and seeded!')

    @flask_app.cli.command('questions-import')
    @click.argument('directory')
    def questions_import_command(directory):
        """Imports question files from DIRECTORY into the question bank."""
        added = load_questions_from_json(directory)
        click.echo(f'{added} questions imported.')
