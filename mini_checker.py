#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
说明：
这是一个语法检查器，只回答一个问题：这段源代码符不符合Mini-C语言的文法？
它不构建语法树，也不做语义分析，发现第一个错误就停下来，报告出错的位置。

整个程序分为三部分：
1. 词法分析器（Lexer）：把源代码字符串切分成Token序列
2. 语法检查器（Parser）：用递归下降法检查Token序列是否符合文法
3. 命令行外壳：读文件、打印结果

采用的方法：
递归下降分析法 - 每个文法规则写一个函数，运算符优先级靠函数调用链表达：
  parse_expr() -> parse_logic_or() -> parse_logic_and()
  -> parse_comparison() -> parse_additive() -> parse_term() -> parse_factor()
越靠后的函数，运算符绑定得越紧。

文法定义：
Program     -> Stmt* EOF
Stmt        -> DeclStmt | AssignStmt | IfStmt | WhileStmt | ForStmt
             | ReturnStmt | Block
Block       -> '{' Stmt* '}'
DeclStmt    -> 'int' ID ';'
AssignStmt  -> ID '=' Expr ';'
IfStmt      -> 'if' '(' Expr ')' Stmt ('else' Stmt)?
WhileStmt   -> 'while' '(' Expr ')' Stmt
ForStmt     -> 'for' '(' ID '=' Expr ';' Expr ';' ID '=' Expr ')' Stmt
ReturnStmt  -> 'return' Expr ';'
Expr        -> LogicOr
LogicOr     -> LogicAnd ('||' LogicAnd)*
LogicAnd    -> Comparison ('&&' Comparison)*
Comparison  -> Additive (CompOp Additive)*
Additive    -> Term (('+' | '-') Term)*
Term        -> Factor (('*' | '/') Factor)*
Factor      -> NUMBER | ID | '(' Expr ')'
"""

import sys
from enum import Enum, auto
from dataclasses import dataclass
from typing import List, Optional, Union


# ==================== 第一部分：词法分析器 ====================

class TokenType(Enum):
    """
    Token类型定义 - 一个封闭的枚举

    语法检查器只根据Token的类型做判断，所以类型要分得足够细：
    - 关键字 if 和 标识符 iff 要区分开
    - 运算符 = 和 == 要区分开
    """
    # 关键字
    INT = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    RETURN = auto()

    # 标识符和字面量
    IDENTIFIER = auto()  # 变量名，如 x, count
    NUMBER = auto()      # 整数，如 42

    # 运算符
    ASSIGN = auto()     # =
    PLUS = auto()       # +
    MINUS = auto()      # -
    STAR = auto()       # *
    SLASH = auto()      # /
    GT = auto()         # >
    LT = auto()         # <
    EQ = auto()         # ==
    NE = auto()         # !=
    LE = auto()         # <=
    GE = auto()         # >=
    AND_OP = auto()     # &&
    OR_OP = auto()      # ||

    # 分隔符
    LPAREN = auto()     # (
    RPAREN = auto()     # )
    LBRACE = auto()     # {
    RBRACE = auto()     # }
    SEMICOLON = auto()  # ;
    COMMA = auto()      # ,

    EOF = auto()        # 输入结束


@dataclass(frozen=True)
class Token:
    """
    Token（词法单元）

    一个Token包含4个信息：
    1. type: 类型
    2. text: 源代码里的原文（EOF的原文是空串）
    3. line: 行号，从1开始
    4. column: 列号，从1开始，指向Token的第一个字符

    Token生成以后不会再被修改，所以用 frozen=True
    """
    type: TokenType
    text: str
    line: int
    column: int

    def __repr__(self):
        return f"Token({self.type.name}, {self.text!r}, line={self.line}, col={self.column})"


# 关键字表 - 大小写敏感，"If" 是普通标识符
KEYWORDS = {
    'int': TokenType.INT,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'while': TokenType.WHILE,
    'for': TokenType.FOR,
    'return': TokenType.RETURN,
}

# 双字符运算符 - 必须先于单字符运算符尝试
TWO_CHAR_TOKENS = {
    '&&': TokenType.AND_OP,
    '||': TokenType.OR_OP,
    '==': TokenType.EQ,
    '!=': TokenType.NE,
    '<=': TokenType.LE,
    '>=': TokenType.GE,
}

# 单字符运算符和分隔符
# 注意 & | ! 不在这里：它们单独出现是词法错误
SINGLE_CHAR_TOKENS = {
    '=': TokenType.ASSIGN,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '>': TokenType.GT,
    '<': TokenType.LT,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
}

# 嵌套过深时 ParseError.expected 的取值
NESTING_TOO_DEEP = "表达式/语句 嵌套过深"

# 反查表：Token类型 -> 固定写法，报错时用
_SPELLINGS = {
    token_type: text
    for table in (KEYWORDS, TWO_CHAR_TOKENS, SINGLE_CHAR_TOKENS)
    for text, token_type in table.items()
}


def describe_kind(token_type: TokenType) -> str:
    """把Token类型翻译成人能看懂的说法，如 ';'、标识符"""
    if token_type in _SPELLINGS:
        return f"'{_SPELLINGS[token_type]}'"
    if token_type == TokenType.IDENTIFIER:
        return "标识符"
    if token_type == TokenType.NUMBER:
        return "数字"
    return "文件结束(EOF)"


def is_digit(ch: str) -> bool:
    # str.isdigit() 会接受 '²' 这类字符，这里只要 ASCII 数字
    return '0' <= ch <= '9'


def is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def is_space(ch: str) -> bool:
    # 和 C 的 isspace 一致；str.isspace() 还会接受 '\u3000'、'\x1c'
    return ch in ' \t\n\v\f\r'


class CheckError(SyntaxError):
    """词法错误和语法错误的共同基类"""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(message)
        self.line = line
        self.column = column


class LexicalError(CheckError):
    """
    词法错误：遇到了任何词法规则都不认识的字符

    属性：
    - char: 出错的字符
    - line, column: 这个字符的位置
    """

    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"词法错误 (行 {line}, 列 {column}): 非法字符 '{char}'", line, column)
        self.char = char


class ParseError(CheckError):
    """
    语法错误：当前Token不能延续任何可用的产生式

    属性：
    - expected: 期望的Token类型；如果不是某个具体类型，是一段上下文描述，如"语句"
    - found: 实际遇到的Token原文
    - line, column: 实际Token的位置
    """

    def __init__(self, expected: Union[TokenType, str], found: str, line: int, column: int):
        if isinstance(expected, TokenType):
            wanted = describe_kind(expected)
        else:
            wanted = expected
        shown = f"'{found}'" if found else "文件结束(EOF)"
        super().__init__(f"语法错误 (行 {line}, 列 {column}): 预期{wanted}，但发现 {shown}", line, column)
        self.expected = expected
        self.found = found


class Lexer:
    """
    词法分析器 - 负责把源代码切分成Token序列

    工作流程：
    1. 从左到右扫描，不回退
    2. 跳过空白字符，同时维护行号、列号
    3. 根据首字符决定读数字、读单词还是读符号
    4. 遇到不认识的字符立刻抛出 LexicalError
    5. 最后追加一个EOF
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def error(self, ch: str):
        raise LexicalError(ch, self.line, self.column)

    def peek(self, offset: int = 0) -> str:
        """查看当前（或向前offset个）字符，不移动位置；到结尾返回'\\0'"""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return '\0'

    def advance(self) -> str:
        """读取当前字符并前进一位，遇到换行符时行号+1、列号归1"""
        ch = self.peek()
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_whitespace(self):
        while self.pos < len(self.source) and is_space(self.peek()):
            self.advance()

    def read_number(self) -> Token:
        """
        读取整数字面量

        只有一条规则：连续的数字就是一个数。没有小数点，也没有指数，
        所以 "3.14" 会在 '.' 处报词法错误。
        """
        start_line, start_col = self.line, self.column
        start = self.pos
        while is_digit(self.peek()):
            self.advance()
        return Token(TokenType.NUMBER, self.source[start:self.pos], start_line, start_col)

    def read_word(self) -> Token:
        """读取一个单词（字母开头，后面是字母或数字），再查关键字表"""
        start_line, start_col = self.line, self.column
        start = self.pos
        while is_letter(self.peek()) or is_digit(self.peek()):
            self.advance()
        word = self.source[start:self.pos]
        return Token(KEYWORDS.get(word, TokenType.IDENTIFIER), word, start_line, start_col)

    def read_symbol(self) -> Token:
        """
        读取运算符或分隔符

        先向前看一位，尝试双字符运算符（&& || == != <= >=），
        不行再查单字符表。= 后面没有 = 就是赋值号。
        """
        start_line, start_col = self.line, self.column
        pair = self.peek() + self.peek(1)
        if pair in TWO_CHAR_TOKENS:
            self.advance(); self.advance()
            return Token(TWO_CHAR_TOKENS[pair], pair, start_line, start_col)

        ch = self.peek()
        if ch in SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, start_line, start_col)

        # 单独的 & | ! 以及其他不认识的字符
        self.error(ch)

    def tokenize(self) -> List[Token]:
        """
        主函数：把整个源代码切分成Token序列，最后加一个EOF

        每次调用都从源代码开头重新扫描，Token列表是局部的，
        所以同一个Lexer调用两次得到的结果相同。
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        tokens: List[Token] = []
        while True:
            self.skip_whitespace()
            if self.pos >= len(self.source):
                break

            ch = self.peek()
            if is_digit(ch):
                tokens.append(self.read_number())
            elif is_letter(ch):
                tokens.append(self.read_word())
            else:
                tokens.append(self.read_symbol())

        tokens.append(Token(TokenType.EOF, '', self.line, self.column))
        return tokens


def tokenize(source: str) -> List[Token]:
    """把源代码切分成Token序列；遇到非法字符抛出 LexicalError"""
    return Lexer(source).tokenize()


# ==================== 第二部分：语法检查器 ====================

@dataclass(frozen=True)
class Accepted:
    """检查通过。token_count 是被走完的Token个数（含EOF）"""
    token_count: int


class Parser:
    """
    递归下降语法检查器

    核心思想：
    为每个文法规则写一个 parse_XXX 方法，方法之间相互调用。
    因为只检查不建树，每个方法的工作就是"吃掉"属于自己的Token，
    吃不下去就报错。

    关键概念：
    1. 当前Token (current): 唯一的向前看符号，文法是LL(1)的
    2. 消耗 (advance): 光标前进一位，永远不会越过EOF
    3. 期望 (expect): 当前Token是期望的类型就消耗，否则报错

    错误处理：
    没有错误恢复。第一个错误直接抛出 ParseError，检查到此结束。
    """

    # 语句分派表：当前Token的类型唯一决定是哪种语句
    STATEMENT_RULES = {
        TokenType.INT: 'parse_decl_stmt',
        TokenType.IDENTIFIER: 'parse_assign_stmt',
        TokenType.IF: 'parse_if_stmt',
        TokenType.WHILE: 'parse_while_stmt',
        TokenType.FOR: 'parse_for_stmt',
        TokenType.RETURN: 'parse_return_stmt',
        TokenType.LBRACE: 'parse_block',
    }

    COMPARISON_OPS = (TokenType.EQ, TokenType.NE, TokenType.GT,
                      TokenType.LT, TokenType.LE, TokenType.GE)

    def __init__(self, tokens: List[Token]):
        """
        参数：
        - tokens: 词法分析器生成的Token列表，必须以唯一的EOF结尾

        内部状态：
        - pos: 当前分析到第几个Token，只会增加
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token序列必须以EOF结尾")
        if any(token.type == TokenType.EOF for token in tokens[:-1]):
            raise ValueError("Token序列中只能有一个EOF")
        self.tokens = tokens
        self.pos = 0

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """消耗当前Token，返回它；光标停在EOF上不再前进"""
        token = self.current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """检查当前Token是否是给定类型之一"""
        return self.current().type in types

    def expect(self, token_type: TokenType) -> Token:
        """
        期望当前Token是某个类型

        如果是：消耗它并返回
        如果不是：抛出 ParseError，带上期望的类型和实际Token的位置
        """
        if self.current().type == token_type:
            return self.advance()
        self.error(token_type)

    def error(self, expected: Union[TokenType, str]):
        token = self.current()
        raise ParseError(expected, token.text, token.line, token.column)

    # ========== 语句 ==========

    def check(self) -> Accepted:
        """
        程序的入口
        文法规则：Program -> Stmt* EOF

        EOF只在这里（和代码块的循环里）被检查，不会被任何产生式消耗。

        每层括号要压7个Python栈帧，每层花括号要压2个，嵌套太深时
        Python会抛 RecursionError。这里把它换成停在当前Token上的 ParseError。
        """
        try:
            while not self.match(TokenType.EOF):
                self.parse_stmt()
        except RecursionError:
            token = self.current()
            raise ParseError(NESTING_TOO_DEEP, token.text, token.line, token.column) from None
        return Accepted(token_count=self.pos + 1)

    def parse_stmt(self):
        """
        解析单条语句

        根据当前Token的类型查 STATEMENT_RULES，找到对应的方法。
        查不到就说明这里不可能开始一条语句。
        """
        rule = self.STATEMENT_RULES.get(self.current().type)
        if rule is None:
            self.error("语句")
        getattr(self, rule)()

    def parse_block(self):
        """
        解析代码块
        文法规则：Block -> '{' Stmt* '}'

        空代码块 {} 是合法的。块没写完就到了EOF，会在 expect('}') 处报错。
        """
        self.expect(TokenType.LBRACE)
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            self.parse_stmt()
        self.expect(TokenType.RBRACE)

    def parse_decl_stmt(self):
        """DeclStmt -> 'int' ID ';'"""
        self.expect(TokenType.INT)
        self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.SEMICOLON)

    def parse_assign_stmt(self):
        """AssignStmt -> ID '=' Expr ';'"""
        self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.ASSIGN)
        self.parse_expr()
        self.expect(TokenType.SEMICOLON)

    def parse_if_stmt(self):
        """
        解析if语句
        文法规则：IfStmt -> 'if' '(' Expr ')' Stmt ('else' Stmt)?

        悬挂else：if (a) if (b) x=1; else x=2;
        内层的if先被完整解析，它看到else就会吃掉，
        所以else总是属于最近的那个if。
        """
        self.expect(TokenType.IF)
        self.expect(TokenType.LPAREN)
        self.parse_expr()
        self.expect(TokenType.RPAREN)
        self.parse_stmt()
        if self.match(TokenType.ELSE):
            self.advance()
            self.parse_stmt()

    def parse_while_stmt(self):
        self.expect(TokenType.WHILE)
        self.expect(TokenType.LPAREN)
        self.parse_expr()
        self.expect(TokenType.RPAREN)
        self.parse_stmt()

    def parse_for_stmt(self):
        """
        解析for循环
        文法规则：ForStmt -> 'for' '(' ID '=' Expr ';' Expr ';' ID '=' Expr ')' Stmt

        初始化部分只能是赋值，不能是声明：for (int i = 0; ...) 是语法错误
        """
        self.expect(TokenType.FOR)
        self.expect(TokenType.LPAREN)
        self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.ASSIGN)
        self.parse_expr()
        self.expect(TokenType.SEMICOLON)
        self.parse_expr()
        self.expect(TokenType.SEMICOLON)
        self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.ASSIGN)
        self.parse_expr()
        self.expect(TokenType.RPAREN)
        self.parse_stmt()

    def parse_return_stmt(self):
        self.expect(TokenType.RETURN)
        self.parse_expr()
        self.expect(TokenType.SEMICOLON)

    # ========== 表达式 - 按优先级从低到高 ==========
    #
    # || 最低，然后是 &&，然后是比较，然后是 + -，* / 最高。
    # 每一层都是"下一层 (本层运算符 下一层)*"，用循环代替左递归，
    # 同一层的运算符因此是左结合的：a - b - c 就是 (a - b) - c

    def parse_expr(self):
        self.parse_logic_or()

    def parse_logic_or(self):
        """LogicOr -> LogicAnd ('||' LogicAnd)*"""
        self.parse_logic_and()
        while self.match(TokenType.OR_OP):
            self.advance()
            self.parse_logic_and()

    def parse_logic_and(self):
        """LogicAnd -> Comparison ('&&' Comparison)*"""
        self.parse_comparison()
        while self.match(TokenType.AND_OP):
            self.advance()
            self.parse_comparison()

    def parse_comparison(self):
        """
        解析比较表达式
        文法规则：Comparison -> Additive (CompOp Additive)*

        比较运算符可以连用，a < b < c 在文法上是合法的，
        反正这里不做类型检查。
        """
        self.parse_additive()
        while self.match(*self.COMPARISON_OPS):
            self.advance()
            self.parse_additive()

    def parse_additive(self):
        """Additive -> Term (('+' | '-') Term)*"""
        self.parse_term()
        while self.match(TokenType.PLUS, TokenType.MINUS):
            self.advance()
            self.parse_term()

    def parse_term(self):
        """Term -> Factor (('*' | '/') Factor)*"""
        self.parse_factor()
        while self.match(TokenType.STAR, TokenType.SLASH):
            self.advance()
            self.parse_factor()

    def parse_factor(self):
        """
        解析因子（优先级的最底层）
        文法规则：Factor -> NUMBER | ID | '(' Expr ')'

        括号里从 parse_expr 重新开始，所以括号可以任意嵌套。
        数字和标识符在这里可以互换，没有类型检查。
        """
        if self.match(TokenType.NUMBER, TokenType.IDENTIFIER):
            self.advance()
        elif self.match(TokenType.LPAREN):
            self.advance()
            self.parse_expr()
            self.expect(TokenType.RPAREN)
        else:
            self.error("表达式")


def check_syntax(tokens: List[Token]) -> Accepted:
    """检查Token序列；通过返回 Accepted，否则抛出 ParseError"""
    return Parser(tokens).check()


@dataclass
class CheckResult:
    """
    一次完整检查（词法 + 语法）的结果，不抛异常

    - accepted: 是否通过
    - tokens: 词法分析成功时的Token序列，否则为空
    - error: 第一个错误，通过时为 None
    """
    accepted: bool
    tokens: List[Token]
    error: Optional[CheckError] = None


def check_source(source: str) -> CheckResult:
    """
    检查一段源代码

    错误以返回值的形式交给调用者，这样批量检查时
    一个文件出错不会影响下一个文件。
    """
    try:
        tokens = tokenize(source)
    except LexicalError as e:
        return CheckResult(accepted=False, tokens=[], error=e)
    try:
        check_syntax(tokens)
    except ParseError as e:
        return CheckResult(accepted=False, tokens=tokens, error=e)
    return CheckResult(accepted=True, tokens=tokens)


# ==================== 第三部分：命令行 ====================

def analyze_source(source: str, show_tokens: bool = False, filename: str = "<input>",
                   quiet: bool = False) -> bool:
    """
    检查一段源代码并打印结果

    流程：源代码 -> 词法分析 -> Token序列 -> 语法检查 -> 通过/第一个错误
    quiet 模式下只打印一行结论。
    """
    result = check_source(source)

    if quiet:
        if result.accepted:
            print(f"✓ {filename}")
        else:
            print(f"✗ {filename}: {result.error}")
        return result.accepted

    print(f"\n{'='*60}")
    print(f"检查文件: {filename}")
    print(f"{'='*60}")
    print("源代码:")
    print("-" * 40)
    for i, line in enumerate(source.split('\n'), 1):
        print(f"{i:3}: {line}")
    print("-" * 40)

    if show_tokens and result.tokens:
        print("\n词法分析结果 (Token序列):")
        for token in result.tokens:
            if token.type != TokenType.EOF:
                print(f"  {token}")

    print("\n" + "="*40)
    if result.accepted:
        print("✓ 该程序符合语法要求")
    else:
        print(f"✗ {result.error}")
    print("="*40)
    return result.accepted


def analyze_file(filename: str, show_tokens: bool = False, quiet: bool = False) -> bool:
    """读取文件并检查；文件读不了也算失败"""
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            source = f.read()
    except FileNotFoundError:
        print(f"错误: 找不到文件 '{filename}'")
        return False
    except (OSError, UnicodeDecodeError) as e:
        print(f"错误: 读取文件失败 - {e}")
        return False

    return analyze_source(source, show_tokens, filename, quiet)


def main(argv: Optional[List[str]] = None) -> int:
    """
    程序入口
    支持两种模式：
    1. 交互模式：不带文件参数运行，每行输入一段代码
    2. 文件模式：python mini_checker.py a.mini b.mini [--tokens] [--quiet]

    文件模式下每个文件都会被检查，全部通过返回0，否则返回1
    """
    args = sys.argv[1:] if argv is None else argv
    show_tokens = '--tokens' in args
    quiet = '--quiet' in args
    filenames = [arg for arg in args if not arg.startswith('--')]

    if not filenames:
        print("="*60)
        print("Mini-C 语法检查器 - 交互模式")
        print("="*60)
        print("输入一行代码，按回车检查")
        print("输入 'quit' 或 'exit' 退出")
        print("-" * 40)

        while True:
            try:
                source = input("\n>>> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if source.strip() in ('quit', 'exit'):
                break
            if source.strip():
                analyze_source(source, show_tokens=True)
        return 0

    failures = 0
    for filename in filenames:
        if not analyze_file(filename, show_tokens, quiet):
            failures += 1

    if len(filenames) > 1 and not quiet:
        print(f"\n共检查 {len(filenames)} 个文件，{len(filenames) - failures} 个通过，{failures} 个失败")

    return 0 if failures == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
