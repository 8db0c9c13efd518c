from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_migrate import Migrate
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
jwt = JWTManager()
migrate = Migrate()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    jwt.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', '*'))

    # Collaborators consulted by the authorization pipeline and game services
    from trivia.services.directory import UserDirectory
    from trivia.services.question_bank import QuestionBank
    UserDirectory().init_app(flask_app)
    QuestionBank().init_app(flask_app)

    from trivia.errors import TriviaError

    @flask_app.errorhandler(TriviaError)
    def handle_trivia_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    # Import and register blueprints here
    from trivia.main import main
    flask_app.register_blueprint(main)

    from trivia.api.games import games
    flask_app.register_blueprint(games, url_prefix='/game')

    from trivia.api.admin import admin
    flask_app.register_blueprint(admin, url_prefix='/admin')

    from trivia.commands import register_commands
    register_commands(flask_app)

    return flask_app
