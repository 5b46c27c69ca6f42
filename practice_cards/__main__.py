from practice_cards.app.main import app

if __name__ == "__main__":
    app(prog_name="practice-cards")
