import pygame
from tetris_config import CONFIG, MAX_STARTING_LEVEL

class Overlay:
    """Menu panel: pick a starting level, toggle options, Enter to play."""
    def __init__(self):
        self.active=True
        self.items=[
            ("STARTING_LEVEL","Start level",1,MAX_STARTING_LEVEL,1),
            ("GHOST_PIECE","Ghost piece",False,True,None),
        ]
        self.index=0

    def toggle(self): self.active=not self.active

    def handle(self,e):
        """Apply one KEYDOWN. Returns "start" when the player confirms."""
        if e.key in (pygame.K_RETURN,pygame.K_KP_ENTER,pygame.K_SPACE): return "start"
        if e.key==pygame.K_UP: self.index=(self.index-1)%len(self.items); return None
        if e.key==pygame.K_DOWN: self.index=(self.index+1)%len(self.items); return None
        key,label,lo,hi,step=self.items[self.index]
        val=CONFIG[key]
        if isinstance(lo,bool):
            if e.key in (pygame.K_LEFT,pygame.K_RIGHT): CONFIG[key]=not val
        else:
            if e.key==pygame.K_LEFT: CONFIG[key]=max(lo,val-step)
            if e.key==pygame.K_RIGHT: CONFIG[key]=min(hi,val+step)
        return None

    def draw(self,screen,font,w,h):
        if not self.active: return
        s=pygame.Surface((w-80,h-80),pygame.SRCALPHA); s.fill((20,25,40,230))
        screen.blit(s,(40,40))
        screen.blit(font.render("TETRIS  -  Enter to play",True,(230,240,255)),(60,60))
        screen.blit(font.render("↑/↓ select • ←/→ change",True,(200,210,235)),(60,84))
        y=80
        for i,(key,label,lo,hi,step) in enumerate(self.items):
            col=(255,255,255) if i==self.index else (200,210,235)
            v=CONFIG[key]
            if isinstance(v,bool): v="on" if v else "off"
            screen.blit(font.render(f"{label}: {v}",True,col),(60,60+y)); y+=30
        y+=20
        for line in ("←/→ Move   ↓ Soft drop","↑ Rotate   Z Rotate CCW",
                     "Space Hard drop   C Hold","P Pause   R Restart   Esc Menu"):
            screen.blit(font.render(line,True,(165,175,215)),(60,60+y)); y+=22
