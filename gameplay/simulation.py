from uttt_core import BoardState, MinimaxAgent, RandomAgent, SimpleStrategyAgent
from uttt_core.board import DRAWN, OPEN

def simulate_game(agent1, agent2, print_game=False):
    board = BoardState()
    agents = {1: agent1, 2: agent2}
    current_player = 1
    
    if print_game:
        print("Initial board:")
        board.print_board()
    
    while board.outcome == OPEN:
        current_agent = agents[current_player]
        move = current_agent.get_move(board)
        
        if not move:
            break  # No moves left
            
        if print_game:
            player_symbol = 'X' if current_player == 1 else 'O'
            print(f"Player {player_symbol} plays at row {move.row}, col {move.col}")
        
        board.apply_move(move, current_player)
        current_player = 3 - current_player
        
        if print_game:
            board.print_board()
            print()
    
    winner = board.outcome if board.outcome not in (OPEN, DRAWN) else None
    if print_game:
        if winner:
            winner_symbol = 'X' if winner == 1 else 'O'
            print(f"Player {winner_symbol} wins!")
        else:
            print("The game is a draw!")
    
    return winner

if __name__ == "__main__":
    # Run a single game with printing
    print("Starting a single game with printing...")
    agent1 = MinimaxAgent(1, depth=2)  # X
    agent2 = RandomAgent(2)            # O
    simulate_game(agent1, agent2, print_game=True)

    # Run multiple games to see statistics
    print("\nRunning 20 games to see statistics...")
    agent2 = SimpleStrategyAgent(2)
    results = {1: 0, 2: 0, None: 0}
    for _ in range(20):
        winner = simulate_game(agent1, agent2, print_game=False)
        results[winner] += 1

    print(f"Results after 20 games:")
    print(f"MinimaxAgent (X) wins: {results[1]}")
    print(f"SimpleStrategyAgent (O) wins: {results[2]}")
    print(f"Draws: {results[None]}")
