from coup.game.game_manager import GameManager


def main():
    game = GameManager()

    print("Welcome to Coup!")
    print("================")

    game.ui_loop()

    winner = game.state.active_players
    print(f"\nGame Over! Winner: {winner[0].name if winner else 'nobody'}")


if __name__ == "__main__":
    main()
